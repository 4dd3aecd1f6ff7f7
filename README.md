# sigheaders

`sigheaders` reads the `Signature-Input` and `Signature` headers of an HTTP
message signature and turns them into plain Python objects. It parses both
headers as structured-field dictionaries and checks that the metadata is well
formed:

- every label in `Signature-Input` has a matching entry in `Signature`, and
  the other way round;
- each `Signature-Input` value is an inner list. Each `Signature` value is a
  byte sequence, which is decoded from base64;
- covered components are quoted strings. A name that starts with `@` is a
  derived component, and it must be one of `@method`, `@target-uri`,
  `@authority`, `@scheme`, `@request-target`, `@path`, `@query`,
  `@query-param` or `@status`. `@signature-params` is rejected because it is
  generated automatically;
- `@query-param` carries a `name` parameter;
- component parameters are combined legally: `bs` with `sf` is rejected,
  `bs` with `key` is rejected, and `key` requires `sf`;
- the known signature parameters have the right types. `created` and
  `expires` are integers. `nonce`, `alg`, `keyid` and `tag` are strings.
  Unknown parameters are ignored.

Every problem raises `sigheaders.types.SignatureError`, a subclass of
`ValueError`, with a message that describes it.

## What it does not do

The package performs no cryptography. It does not build signature bases,
create signatures or verify them, and it does not read headers from request
or response objects. You pass it the header values as strings, and it gives
you back the parsed metadata and the raw signature bytes.

## Installation

```
pip install sigheaders
```

The package has no runtime dependencies and needs Python 3.10 or later.

## Parsing both headers

```python
from sigheaders.parser import parse_signatures
from sigheaders.types import SignatureError

signature_input = 'sig1=("@method" "date");created=1618884473;keyid="test-key-rsa";alg="rsa-pss-sha512"'
signature = "sig1=:aGVsbG8gd29ybGQ=:"

try:
    parsed = parse_signatures(signature_input, signature)
except SignatureError as exc:
    print(f"rejected: {exc}")
else:
    entry = parsed.signatures["sig1"]
    for component in entry.covered_components:
        print(component.name, component.type)  # "@method derived", "date field"
    print(entry.signature_params.created)    # 1618884473
    print(entry.signature_params.algorithm)  # 'rsa-pss-sha512'
    print(entry.signature_params.key_id)     # 'test-key-rsa'
    print(entry.signature_value)             # b'hello world'
```

A signature parameter that is absent is `None`. The specification does not
require any of them. If either header is empty, parsing fails.

## Parsing only the metadata

If you cache signature metadata separately from the signature bytes, parse
just the `Signature-Input` header. Each entry's `signature_value` is then
`b""`:

```python
from sigheaders.parser import parse_signature_input

parsed = parse_signature_input('sig1=("@authority" "content-digest";sf);created=1618884473')
```

## Checking `created` and `expires`

`validate_signature_params` applies application policy to a parsed entry's
parameters. `SignatureParamsValidationOptions` sets that policy:

- `require_created` and `require_expires` require the parameter to be present;
- `created_not_newer_than` (a `timedelta`) allows a limited clock skew into
  the future;
- `created_not_older_than` (a `timedelta`) sets a maximum signature age;
- `reject_expired` rejects signatures whose `expires` has passed;
- `expires_not_before_created` rejects an `expires` earlier than `created`;
- `now` (a `datetime`) is the time to check against. If it is not set, the
  current time is used.

A zero duration turns its window check off, and a negative one is an error.
If either window is set, `created` must be present. If no check is enabled,
validation passes. If a check fails, the function raises `SignatureError`.

```python
from datetime import timedelta

from sigheaders.params_validation import (
    SignatureParamsValidationOptions,
    validate_signature_params,
)

policy = SignatureParamsValidationOptions(
    require_created=True,
    created_not_older_than=timedelta(minutes=5),
    created_not_newer_than=timedelta(minutes=1),
    reject_expired=True,
)
validate_signature_params(entry.signature_params, policy)
```

## Checking single components

`sigheaders.validator` exposes the component checks that the parser runs:
`validate_component_identifier`, `validate_derived_component_parameters` and
`validate_parameter_combinations`. Each takes a `ComponentIdentifier` and
raises `SignatureError` if the component breaks a rule.

## Types

`sigheaders.types` holds the data model:

- `ParsedSignatures`, whose `signatures` dictionary maps labels to
  `SignatureEntry` objects;
- `SignatureEntry`, `SignatureParams`, `ComponentIdentifier` (with
  `is_derived()` and `is_field()`) and `Parameter`;
- `ComponentType`, whose `str()` is `field` or `derived`;
- the structured-field bare items `Boolean`, `Integer`, `String`, `Token` and
  `ByteSequence`, which are used as component parameter values.

## Running the tests

```
pip install -e ".[test]"
pytest
```