"""
Entitlement input parsing.
"""
from .parser import (
    FIELD_SEPARATOR,
    parse_address,
    parse_amount,
    parse_line,
    parse_entitlements,
    decode_input,
    load_entitlements,
)

__all__ = [
    "FIELD_SEPARATOR",
    "parse_address",
    "parse_amount",
    "parse_line",
    "parse_entitlements",
    "decode_input",
    "load_entitlements",
]
