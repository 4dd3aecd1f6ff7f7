"""Parse and validate HTTP Message Signature headers (no cryptography)."""

__version__ = "0.1.0"
__all__ = ["params_validation", "parser", "types", "validator"]