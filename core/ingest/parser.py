"""
Input Parser
Turns the off-chain entitlement export into typed records.

Input format:
    address,amount              <- header, ignored
    0x1111...1111,1000
    0x2222...2222,2500

Rules:
- Exactly two comma-separated fields per line, each stripped of whitespace
- Address: 0x + 40 hex digits. Mixed-case addresses must carry a valid
  EIP-55 checksum; all-lower and all-upper are accepted as is
- Amount: non-negative decimal integer literal below 2**256
- Addresses must be unique (case-insensitive)
- Blank lines are skipped
- Output preserves input order
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from eth_utils import is_checksum_address, is_hex_address

from core.schemas.errors import MalformedRecordError
from core.schemas.records import UINT256_LIMIT, EntitlementRecord


logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ","

_AMOUNT_RE = re.compile(r"[0-9]+")


def parse_address(token: str, line_number: int | None = None) -> str:
    """
    Validate an address token and return it lower-cased.

    Raises:
        MalformedRecordError: If the token is not a 20-byte 0x address
    """
    if not token.startswith("0x") or not is_hex_address(token):
        raise MalformedRecordError(
            f"Invalid address: {token!r}",
            line_number=line_number,
            details={"field": "address", "value": token},
        )

    hex_part = token[2:]
    if hex_part != hex_part.lower() and hex_part != hex_part.upper():
        if not is_checksum_address(token):
            raise MalformedRecordError(
                f"Address checksum mismatch: {token!r}",
                line_number=line_number,
                details={"field": "address", "value": token},
            )

    return token.lower()


def parse_amount(token: str, line_number: int | None = None) -> int:
    """
    Validate an amount token and return it as an int.

    Raises:
        MalformedRecordError: If the token is not a decimal uint256 literal
    """
    if not _AMOUNT_RE.fullmatch(token):
        raise MalformedRecordError(
            f"Amount must be a non-negative integer, got {token!r}",
            line_number=line_number,
            details={"field": "amount", "value": token},
        )

    amount = int(token)
    if amount >= UINT256_LIMIT:
        raise MalformedRecordError(
            f"Amount does not fit in uint256: {token}",
            line_number=line_number,
            details={"field": "amount", "value": token},
        )
    return amount


def parse_line(line: str, line_number: int) -> EntitlementRecord:
    """
    Parse one data line into a record.

    Raises:
        MalformedRecordError: On wrong field count or invalid fields
    """
    fields = [f.strip() for f in line.split(FIELD_SEPARATOR)]
    if len(fields) != 2:
        raise MalformedRecordError(
            f"Expected 2 fields (address,amount), got {len(fields)}",
            line_number=line_number,
            details={"line": line},
        )

    address = parse_address(fields[0], line_number)
    amount = parse_amount(fields[1], line_number)
    return EntitlementRecord(address=address, amount=amount, line_number=line_number)


def parse_entitlements(text: str, *, has_header: bool = True) -> list[EntitlementRecord]:
    """
    Parse the full input text into records.

    Args:
        text: Raw input text
        has_header: Skip the first line

    Returns:
        Records in input order (possibly empty)

    Raises:
        MalformedRecordError: On the first invalid or duplicate line
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines()
    start = 1 if has_header else 0

    records: list[EntitlementRecord] = []
    seen: dict[str, int] = {}

    for offset, line in enumerate(lines[start:], start=start + 1):
        if not line.strip():
            continue

        record = parse_line(line, offset)
        if record.address in seen:
            raise MalformedRecordError(
                f"Duplicate address {record.address} (first seen on line {seen[record.address]})",
                line_number=offset,
                details={"address": record.address, "first_line": seen[record.address]},
            )
        seen[record.address] = offset
        records.append(record)

    logger.debug(f"Parsed {len(records)} records from {len(lines)} lines")
    return records


def decode_input(raw: bytes, encoding: str = "utf-8") -> str:
    """
    Decode raw input bytes.

    Raises:
        MalformedRecordError: If the bytes do not decode; reported on the
            line holding the first undecodable byte
    """
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise MalformedRecordError(
            f"Input is not valid {encoding}: {e.reason} at byte {e.start}",
            line_number=raw[:e.start].count(b"\n") + 1,
            details={"encoding": encoding, "byte_offset": e.start},
        ) from e


def load_entitlements(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    has_header: bool = True,
) -> list[EntitlementRecord]:
    """
    Read and parse an entitlement file.

    Raises:
        MalformedRecordError: On invalid input lines or undecodable bytes
        OSError: If the file cannot be read
    """
    path = Path(path)
    logger.info(f"Reading entitlements from {path}")
    text = decode_input(path.read_bytes(), encoding)
    return parse_entitlements(text, has_header=has_header)


__all__ = [
    "FIELD_SEPARATOR",
    "parse_address",
    "parse_amount",
    "parse_line",
    "parse_entitlements",
    "decode_input",
    "load_entitlements",
]
