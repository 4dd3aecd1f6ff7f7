"""Parsing of the Signature-Input and Signature HTTP header fields."""

from __future__ import annotations

import base64
import binascii
import string
from dataclasses import dataclass, field
from typing import Union

from .types import (
    BareItem,
    Boolean,
    ByteSequence,
    ComponentIdentifier,
    ComponentType,
    Integer,
    Parameter,
    ParsedSignatures,
    SignatureEntry,
    SignatureError,
    SignatureParams,
    String,
    Token,
)
from .validator import validate_component_identifier

_DIGITS = frozenset(string.digits)
_ALPHA = frozenset(string.ascii_letters)
_KEY_START = frozenset(string.ascii_lowercase + "*")
_KEY_CHARS = frozenset(string.ascii_lowercase + string.digits + "_-.*")
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~:/")
_BASE64_CHARS = frozenset(string.ascii_letters + string.digits + "+/=")

_Value = Union[bool, int, float, str, bytes, Token]


@dataclass
class _Item:
    value: _Value
    params: dict[str, _Value] = field(default_factory=dict)


@dataclass
class _InnerList:
    items: list[_Item]
    params: dict[str, _Value] = field(default_factory=dict)


_Member = Union[_Item, _InnerList]


class _StructuredFieldParser:
    """Parser for structured field dictionaries."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._text)

    def _error(self, message: str) -> SignatureError:
        return SignatureError(f"{message} at offset {self._pos}")

    def _skip(self, chars: str) -> None:
        while not self._at_end() and self._text[self._pos] in chars:
            self._pos += 1

    def parse_dictionary(self) -> dict[str, _Member]:
        self._skip(" ")
        members: dict[str, _Member] = {}
        while not self._at_end():
            key = self._parse_key()
            if self._peek() == "=":
                self._pos += 1
                members[key] = self._parse_item_or_inner_list()
            else:
                members[key] = _Item(True, self._parse_parameters())
            self._skip(" \t")
            if self._at_end():
                break
            if self._peek() != ",":
                raise self._error("expected ',' after dictionary member")
            self._pos += 1
            self._skip(" \t")
            if self._at_end():
                raise self._error("trailing comma in dictionary")
        return members

    def _parse_item_or_inner_list(self) -> _Member:
        if self._peek() == "(":
            return self._parse_inner_list()
        return self._parse_item()

    def _parse_inner_list(self) -> _InnerList:
        self._pos += 1
        items: list[_Item] = []
        while not self._at_end():
            self._skip(" ")
            if self._peek() == ")":
                self._pos += 1
                return _InnerList(items, self._parse_parameters())
            items.append(self._parse_item())
            if self._peek() not in (" ", ")"):
                raise self._error("expected space or ')' in inner list")
        raise self._error("unterminated inner list")

    def _parse_item(self) -> _Item:
        value = self._parse_bare_item()
        return _Item(value, self._parse_parameters())

    def _parse_parameters(self) -> dict[str, _Value]:
        params: dict[str, _Value] = {}
        while self._peek() == ";":
            self._pos += 1
            self._skip(" ")
            key = self._parse_key()
            value: _Value = True
            if self._peek() == "=":
                self._pos += 1
                value = self._parse_bare_item()
            params[key] = value
        return params

    def _parse_key(self) -> str:
        if self._peek() not in _KEY_START or self._at_end():
            raise self._error("invalid key")
        start = self._pos
        while not self._at_end() and self._text[self._pos] in _KEY_CHARS:
            self._pos += 1
        return self._text[start:self._pos]

    def _parse_bare_item(self) -> _Value:
        char = self._peek()
        if char == "-" or char in _DIGITS and char:
            return self._parse_number()
        if char == '"':
            return self._parse_string()
        if char == "*" or char in _ALPHA and char:
            return self._parse_token()
        if char == ":":
            return self._parse_byte_sequence()
        if char == "?":
            return self._parse_boolean()
        raise self._error("unrecognised bare item")

    def _parse_number(self) -> Union[int, float]:
        sign = 1
        if self._peek() == "-":
            self._pos += 1
            sign = -1
        if not self._peek() or self._peek() not in _DIGITS:
            raise self._error("expected digit")
        start = self._pos
        is_decimal = False
        while not self._at_end():
            char = self._text[self._pos]
            if char in _DIGITS:
                self._pos += 1
            elif char == "." and not is_decimal:
                if self._pos - start > 12:
                    raise self._error("decimal integer part too long")
                is_decimal = True
                self._pos += 1
            else:
                break
            length = self._pos - start
            if not is_decimal and length > 15:
                raise self._error("integer too long")
            if is_decimal and length > 16:
                raise self._error("decimal too long")
        text = self._text[start:self._pos]
        if not is_decimal:
            return sign * int(text)
        fraction = text.split(".", 1)[1]
        if not fraction:
            raise self._error("decimal ends with '.'")
        if len(fraction) > 3:
            raise self._error("decimal fraction too long")
        return sign * float(text)

    def _parse_string(self) -> str:
        self._pos += 1
        chars: list[str] = []
        while not self._at_end():
            char = self._text[self._pos]
            self._pos += 1
            if char == "\\":
                if self._at_end():
                    raise self._error("unterminated escape in string")
                escaped = self._text[self._pos]
                self._pos += 1
                if escaped not in ('"', "\\"):
                    raise self._error("invalid escape in string")
                chars.append(escaped)
            elif char == '"':
                return "".join(chars)
            elif not " " <= char <= "~":
                raise self._error("invalid character in string")
            else:
                chars.append(char)
        raise self._error("unterminated string")

    def _parse_token(self) -> Token:
        start = self._pos
        self._pos += 1
        while not self._at_end() and self._text[self._pos] in _TOKEN_CHARS:
            self._pos += 1
        return Token(self._text[start:self._pos])

    def _parse_byte_sequence(self) -> bytes:
        self._pos += 1
        end = self._text.find(":", self._pos)
        if end < 0:
            raise self._error("unterminated byte sequence")
        encoded = self._text[self._pos:end]
        if any(char not in _BASE64_CHARS for char in encoded):
            raise self._error("invalid character in byte sequence")
        try:
            decoded = base64.b64decode(encoded, validate=True)
        except binascii.Error as exc:
            raise self._error(f"invalid base64 in byte sequence ({exc})") from exc
        self._pos = end + 1
        return decoded

    def _parse_boolean(self) -> bool:
        self._pos += 1
        char = self._peek()
        if char == "1":
            self._pos += 1
            return True
        if char == "0":
            self._pos += 1
            return False
        raise self._error("invalid boolean")


def _parse_dictionary(text: str, header: str) -> dict[str, _Member]:
    try:
        return _StructuredFieldParser(text).parse_dictionary()
    except SignatureError as exc:
        raise SignatureError(f"failed to parse {header} header: {exc}") from exc


def _type_name(value: object) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "decimal"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bytes):
        return "byte sequence"
    if isinstance(value, Token):
        return "token"
    return type(value).__name__


def _to_bare_item(value: _Value) -> BareItem:
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, Token):
        return Token(value.value)
    if isinstance(value, str):
        return String(value)
    if isinstance(value, bytes):
        return ByteSequence(value)
    return String(str(value))


_INTEGER_PARAMS = {"created": "created", "expires": "expires"}
_STRING_PARAMS = {
    "nonce": "nonce",
    "alg": "algorithm",
    "keyid": "key_id",
    "tag": "tag",
}


def _extract_signature_params(params: dict[str, _Value]) -> SignatureParams:
    result = SignatureParams()
    for key, value in params.items():
        if key in _INTEGER_PARAMS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise SignatureError(
                    f"parameter '{key}' must be an integer, got {_type_name(value)}"
                )
            setattr(result, _INTEGER_PARAMS[key], value)
        elif key in _STRING_PARAMS:
            if not isinstance(value, str):
                raise SignatureError(
                    f"parameter '{key}' must be a string, got {_type_name(value)}"
                )
            setattr(result, _STRING_PARAMS[key], value)
    return result


def _entry_from_input(label: str, member: _Member) -> SignatureEntry:
    if not isinstance(member, _InnerList):
        raise SignatureError("header Signature-Input value must be an inner list")
    components: list[ComponentIdentifier] = []
    for position, item in enumerate(member.items):
        name = item.value
        if not isinstance(name, str):
            raise SignatureError(
                f"covered component must be a string, got {_type_name(name)}"
            )
        component = ComponentIdentifier(
            name=name,
            type=ComponentType.DERIVED if name.startswith("@") else ComponentType.FIELD,
            parameters=[
                Parameter(key, _to_bare_item(value)) for key, value in item.params.items()
            ],
        )
        try:
            validate_component_identifier(component)
        except SignatureError as exc:
            raise SignatureError(f"invalid component at position {position}: {exc}") from exc
        components.append(component)
    return SignatureEntry(
        label=label,
        covered_components=components,
        signature_params=_extract_signature_params(member.params),
    )


def parse_signatures(signature_input: str, signature: str) -> ParsedSignatures:
    """Parse matching Signature-Input and Signature header values.

    Raises SignatureError if either header is empty or malformed, if the
    labels of the two headers differ, or if any entry is invalid.
    """
    if not signature_input and not signature:
        raise SignatureError("both Signature-Input and Signature headers are empty")
    if not signature_input:
        raise SignatureError("header Signature-Input is empty")
    if not signature:
        raise SignatureError("header Signature is empty")

    inputs = _parse_dictionary(signature_input, "Signature-Input")
    values = _parse_dictionary(signature, "Signature")

    for label in inputs:
        if label not in values:
            raise SignatureError(
                f'header Signature-Input label "{label}" has no corresponding '
                "Signature entry"
            )
    for label in values:
        if label not in inputs:
            raise SignatureError(
                f'header Signature label "{label}" has no corresponding '
                "Signature-Input entry"
            )

    result = ParsedSignatures()
    for label, member in inputs.items():
        try:
            entry = _entry_from_input(label, member)
            value = values[label]
            if not isinstance(value, _Item):
                raise SignatureError("signature value must be an item")
            if not isinstance(value.value, bytes):
                raise SignatureError(
                    "signature value must be a byte sequence, got "
                    f"{_type_name(value.value)}"
                )
            entry.signature_value = value.value
        except SignatureError as exc:
            raise SignatureError(f'failed to parse signature "{label}": {exc}') from exc
        result.signatures[label] = entry
    return result


def parse_signature_input(signature_input: str) -> ParsedSignatures:
    """Parse only a Signature-Input header; signature values stay empty."""
    if not signature_input:
        raise SignatureError("header Signature-Input is empty")
    inputs = _parse_dictionary(signature_input, "Signature-Input")
    result = ParsedSignatures()
    for label, member in inputs.items():
        try:
            result.signatures[label] = _entry_from_input(label, member)
        except SignatureError as exc:
            raise SignatureError(
                f'failed to parse signature input "{label}": {exc}'
            ) from exc
    return result