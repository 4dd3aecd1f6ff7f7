import pytest

from sigheaders.types import (
    Boolean,
    ByteSequence,
    ComponentIdentifier,
    ComponentType,
    Integer,
    Parameter,
    ParsedSignatures,
    SignatureEntry,
    SignatureParams,
    String,
    Token,
)


def test_parsed_signatures_holds_entries():
    ps = ParsedSignatures()
    ps.signatures["sig1"] = SignatureEntry(label="sig1")
    assert len(ps.signatures) == 1
    assert ps.signatures["sig1"].label == "sig1"


def test_signature_entry_required_fields():
    entry = SignatureEntry(
        label="sig1",
        covered_components=[ComponentIdentifier(name="@method")],
        signature_params=SignatureParams(algorithm="rsa-pss-sha512"),
        signature_value=b"signature bytes",
    )
    assert entry.label == "sig1"
    assert len(entry.covered_components) == 1
    assert entry.signature_params.algorithm == "rsa-pss-sha512"
    assert entry.signature_value == b"signature bytes"


def test_signature_entry_defaults():
    entry = SignatureEntry(label="x")
    assert entry.covered_components == []
    assert entry.signature_params == SignatureParams()
    assert entry.signature_value == b""


def test_component_identifier_name_and_parameters():
    comp = ComponentIdentifier(
        name="content-digest",
        parameters=[Parameter(key="sf", value=Boolean(True))],
    )
    assert comp.name == "content-digest"
    assert len(comp.parameters) == 1
    param = comp.parameters[0]
    assert param.key == "sf"
    assert isinstance(param.value, Boolean)
    assert param.value.value is True


def test_signature_params_all_fields():
    params = SignatureParams(
        created=1618884473,
        expires=1618884773,
        nonce="random123",
        algorithm="rsa-pss-sha512",
        key_id="key-1",
        tag="app-tag",
    )
    assert params.created == 1618884473
    assert params.expires == 1618884773
    assert params.nonce == "random123"
    assert params.algorithm == "rsa-pss-sha512"
    assert params.key_id == "key-1"
    assert params.tag == "app-tag"


def test_signature_params_default_to_none():
    params = SignatureParams()
    assert [
        params.created,
        params.expires,
        params.nonce,
        params.algorithm,
        params.key_id,
        params.tag,
    ] == [None] * 6


@pytest.mark.parametrize(
    "item, cls, value",
    [
        (Boolean(True), Boolean, True),
        (Integer(42), Integer, 42),
        (String("hello"), String, "hello"),
        (Token("example"), Token, "example"),
        (ByteSequence(b"data"), ByteSequence, b"data"),
    ],
)
def test_bare_item_types(item, cls, value):
    assert type(item) is cls
    assert item.value == value


def test_token_and_string_are_distinct():
    assert Token("abc") != String("abc")


@pytest.mark.parametrize(
    "ctype, text",
    [(ComponentType.FIELD, "field"), (ComponentType.DERIVED, "derived")],
)
def test_component_type_str(ctype, text):
    assert str(ctype) == text


def test_component_identifier_classification():
    derived = ComponentIdentifier(name="@method", type=ComponentType.DERIVED)
    fld = ComponentIdentifier(name="date")
    assert derived.is_derived() is True
    assert derived.is_field() is False
    assert fld.is_field() is True
    assert fld.is_derived() is False