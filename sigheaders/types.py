"""Data model for parsed HTTP message signatures (Signature-Input / Signature)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SignatureError(ValueError):
    """Raised when signature headers or their metadata are invalid."""


class ComponentType(Enum):
    """Kind of a covered component: an HTTP field or a derived component."""

    FIELD = 0
    DERIVED = 1

    def __str__(self) -> str:
        return "derived" if self is ComponentType.DERIVED else "field"


@dataclass(frozen=True)
class Boolean:
    """Boolean bare item (?0 or ?1)."""

    value: bool


@dataclass(frozen=True)
class Integer:
    """Integer bare item."""

    value: int


@dataclass(frozen=True)
class String:
    """Quoted string bare item."""

    value: str


@dataclass(frozen=True)
class Token:
    """Unquoted token bare item."""

    value: str


@dataclass(frozen=True)
class ByteSequence:
    """Byte sequence bare item (:base64:)."""

    value: bytes


BareItem = Union[Boolean, Integer, String, Token, ByteSequence]


@dataclass(frozen=True)
class Parameter:
    """A component parameter such as sf, key, bs, tr, req or name."""

    key: str
    value: BareItem


@dataclass
class ComponentIdentifier:
    """A covered component with its ordered parameters."""

    name: str
    type: ComponentType = ComponentType.FIELD
    parameters: list[Parameter] = field(default_factory=list)

    def is_derived(self) -> bool:
        """True for a derived component (name starting with '@')."""
        return self.type is ComponentType.DERIVED

    def is_field(self) -> bool:
        """True for an HTTP field component."""
        return self.type is ComponentType.FIELD


@dataclass
class SignatureParams:
    """Signature metadata parameters; each is None when absent."""

    created: Optional[int] = None
    expires: Optional[int] = None
    nonce: Optional[str] = None
    algorithm: Optional[str] = None
    key_id: Optional[str] = None
    tag: Optional[str] = None


@dataclass
class SignatureEntry:
    """One labelled signature with its covered components and metadata."""

    label: str
    covered_components: list[ComponentIdentifier] = field(default_factory=list)
    signature_params: SignatureParams = field(default_factory=SignatureParams)
    signature_value: bytes = b""


@dataclass
class ParsedSignatures:
    """All signatures found in a message, keyed by label."""

    signatures: dict[str, SignatureEntry] = field(default_factory=dict)