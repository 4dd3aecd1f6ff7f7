"""Time-window and presence checks for signature parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from .types import SignatureError, SignatureParams


@dataclass
class SignatureParamsValidationOptions:
    """Application policy for the created and expires parameters.

    ``now`` defaults to the current time when a check needs it.
    Zero durations disable the corresponding window check.
    """

    now: Optional[datetime] = None
    require_created: bool = False
    require_expires: bool = False
    created_not_newer_than: timedelta = field(default_factory=timedelta)
    created_not_older_than: timedelta = field(default_factory=timedelta)
    reject_expired: bool = False
    expires_not_before_created: bool = False


def validate_signature_params(
    params: SignatureParams, opts: SignatureParamsValidationOptions
) -> None:
    """Raise SignatureError if ``params`` violates the policy in ``opts``."""
    zero = timedelta(0)
    if opts.created_not_newer_than < zero:
        raise SignatureError("created not-newer-than must be >= 0")
    if opts.created_not_older_than < zero:
        raise SignatureError("created not-older-than must be >= 0")

    newer = opts.created_not_newer_than.total_seconds()
    older = opts.created_not_older_than.total_seconds()
    needs_created = opts.require_created or newer > 0 or older > 0
    needs_now = newer > 0 or older > 0 or opts.reject_expired

    now = 0.0
    if needs_now:
        moment = opts.now if opts.now is not None else datetime.now(timezone.utc)
        now = moment.timestamp()

    created = params.created
    if created is None:
        if needs_created:
            raise SignatureError('missing "created" parameter')
    else:
        if newer > 0 and created > now + newer:
            raise SignatureError("created time is too far in the future")
        if older > 0 and created + older < now:
            raise SignatureError("created time is too old")

    expires = params.expires
    if expires is None:
        if opts.require_expires:
            raise SignatureError('missing "expires" parameter')
    else:
        if opts.reject_expired and now > expires:
            raise SignatureError("signature is expired")
        if opts.expires_not_before_created and created is not None and expires < created:
            raise SignatureError("expires time is before created time")