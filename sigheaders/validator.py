"""Validation of covered component identifiers."""

from __future__ import annotations

from .types import ComponentIdentifier, ComponentType, SignatureError

VALID_DERIVED_COMPONENTS = frozenset(
    {
        "@method",
        "@target-uri",
        "@authority",
        "@scheme",
        "@request-target",
        "@path",
        "@query",
        "@query-param",
        "@status",
    }
)

RESERVED_DERIVED_COMPONENTS = frozenset({"@signature-params"})


def validate_component_identifier(comp: ComponentIdentifier) -> None:
    """Check a component against the derived-component registry and parameter rules."""
    if comp.type is ComponentType.DERIVED:
        if comp.name in RESERVED_DERIVED_COMPONENTS:
            raise SignatureError(
                f"component {comp.name!r} must not appear in covered components "
                "(auto-generated)"
            )
        if comp.name not in VALID_DERIVED_COMPONENTS:
            raise SignatureError(
                f"invalid derived component {comp.name!r}: "
                "not in RFC 9421 Section 2.2 registry"
            )
        validate_derived_component_parameters(comp)
    validate_parameter_combinations(comp)


def validate_derived_component_parameters(comp: ComponentIdentifier) -> None:
    """Check parameters that specific derived components require."""
    if comp.name == "@query-param" and not any(
        param.key == "name" for param in comp.parameters
    ):
        raise SignatureError(
            f"derived component {comp.name!r} requires 'name' parameter"
        )


def validate_parameter_combinations(comp: ComponentIdentifier) -> None:
    """Reject the bs/sf, bs/key and key-without-sf parameter combinations."""
    keys = {param.key for param in comp.parameters}
    has_bs, has_sf, has_key = "bs" in keys, "sf" in keys, "key" in keys
    prefix = f"component {comp.name!r} has invalid parameter combination"
    if has_bs and has_sf:
        raise SignatureError(f"{prefix}: 'bs' and 'sf' are mutually exclusive")
    if has_bs and has_key:
        raise SignatureError(f"{prefix}: 'bs' and 'key' are mutually exclusive")
    if has_key and not has_sf:
        raise SignatureError(f"{prefix}: 'key' parameter requires 'sf' parameter")