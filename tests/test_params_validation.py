from datetime import datetime, timedelta, timezone

import pytest

from sigheaders.params_validation import (
    SignatureParamsValidationOptions,
    validate_signature_params,
)
from sigheaders.types import SignatureError, SignatureParams

NOW = datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
BASE = 1_700_000_000

CREATED_NEW = BASE + 6
CREATED_OLD = BASE - 11
CREATED_OK = BASE - 9
EXPIRES_BEFORE_CREATED = BASE - 20
EXPIRES_PAST = BASE - 1
EXPIRES_FUTURE = BASE + 1


@pytest.mark.parametrize(
    "params, opts, message",
    [
        (SignatureParams(), SignatureParamsValidationOptions(require_created=True),
         'missing "created" parameter'),
        (SignatureParams(),
         SignatureParamsValidationOptions(created_not_older_than=timedelta(seconds=1)),
         'missing "created" parameter'),
        (SignatureParams(), SignatureParamsValidationOptions(require_expires=True),
         'missing "expires" parameter'),
        (SignatureParams(created=CREATED_NEW),
         SignatureParamsValidationOptions(now=NOW, created_not_newer_than=timedelta(seconds=5)),
         "created time is too far in the future"),
        (SignatureParams(created=CREATED_OLD),
         SignatureParamsValidationOptions(now=NOW, created_not_older_than=timedelta(seconds=10)),
         "created time is too old"),
        (SignatureParams(expires=EXPIRES_PAST),
         SignatureParamsValidationOptions(now=NOW, reject_expired=True),
         "signature is expired"),
        (SignatureParams(created=CREATED_OK, expires=EXPIRES_BEFORE_CREATED),
         SignatureParamsValidationOptions(expires_not_before_created=True),
         "expires time is before created time"),
    ],
    ids=[
        "require created missing",
        "created window requires created",
        "require expires missing",
        "created too new",
        "created too old",
        "expires in past",
        "expires before created",
    ],
)
def test_rejected(params, opts, message):
    with pytest.raises(SignatureError) as excinfo:
        validate_signature_params(params, opts)
    assert message in str(excinfo.value)


@pytest.mark.parametrize(
    "params, opts",
    [
        (SignatureParams(), SignatureParamsValidationOptions()),
        (SignatureParams(created=CREATED_OK),
         SignatureParamsValidationOptions(now=NOW, created_not_older_than=timedelta(seconds=10))),
        (SignatureParams(expires=EXPIRES_FUTURE),
         SignatureParamsValidationOptions(now=NOW, reject_expired=True)),
        (SignatureParams(expires=EXPIRES_PAST),
         SignatureParamsValidationOptions(expires_not_before_created=True)),
    ],
    ids=[
        "no options",
        "created within window",
        "expires in future",
        "expires before created without created",
    ],
)
def test_accepted(params, opts):
    assert validate_signature_params(params, opts) is None


def test_negative_newer_window_rejected():
    opts = SignatureParamsValidationOptions(created_not_newer_than=timedelta(seconds=-1))
    with pytest.raises(SignatureError, match="not-newer-than must be >= 0"):
        validate_signature_params(SignatureParams(created=BASE), opts)


def test_negative_older_window_rejected():
    opts = SignatureParamsValidationOptions(created_not_older_than=timedelta(seconds=-1))
    with pytest.raises(SignatureError, match="not-older-than must be >= 0"):
        validate_signature_params(SignatureParams(created=BASE), opts)


def test_window_boundaries_are_inclusive():
    opts = SignatureParamsValidationOptions(
        now=NOW,
        created_not_newer_than=timedelta(seconds=5),
        created_not_older_than=timedelta(seconds=10),
    )
    assert validate_signature_params(SignatureParams(created=BASE + 5), opts) is None
    assert validate_signature_params(SignatureParams(created=BASE - 10), opts) is None


def test_expires_equal_to_now_is_not_expired():
    opts = SignatureParamsValidationOptions(now=NOW, reject_expired=True)
    assert validate_signature_params(SignatureParams(expires=BASE), opts) is None


def test_default_now_uses_current_time():
    opts = SignatureParamsValidationOptions(reject_expired=True)
    with pytest.raises(SignatureError, match="signature is expired"):
        validate_signature_params(SignatureParams(expires=1), opts)