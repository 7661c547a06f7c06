"""
Test fixtures package for merklegen tests.

This package provides factory functions for creating test objects.
- common.py: Addresses, records and raw input factories

Usage:
    from fixtures.common import make_records, make_input_text

    def test_something():
        records = make_records(5)
"""

from .common import (
    ADDRESS_A,
    ADDRESS_B,
    ABSENT_ADDRESS,
    DEFAULT_HEADER,
    make_address,
    make_record,
    make_records,
    make_two_records,
    make_input_text,
    records_to_rows,
    write_input_file,
)

__all__ = [
    "ADDRESS_A",
    "ADDRESS_B",
    "ABSENT_ADDRESS",
    "DEFAULT_HEADER",
    "make_address",
    "make_record",
    "make_records",
    "make_two_records",
    "make_input_text",
    "records_to_rows",
    "write_input_file",
]
