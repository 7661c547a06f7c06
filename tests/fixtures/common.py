"""
Common test fixtures shared by all modules.

Provides factory functions for core merklegen data structures:
- Addresses
- EntitlementRecord
- Raw input text / files
"""

from pathlib import Path
from typing import Iterable, Sequence

from core.schemas.records import EntitlementRecord


# Two fixed addresses used by the two-leaf scenario
ADDRESS_A = "0x" + "aa" * 19 + "01"
ADDRESS_B = "0x" + "bb" * 19 + "02"

# Not present in any fixture set
ABSENT_ADDRESS = "0x" + "ff" * 20

DEFAULT_HEADER = "address,amount"


# =============================================================================
# Address Factory
# =============================================================================

def make_address(i: int) -> str:
    """Deterministic lower-case address derived from an integer (i >= 1)."""
    return "0x" + f"{i:040x}"


# =============================================================================
# EntitlementRecord Factories
# =============================================================================

def make_record(
    address: str = ADDRESS_A,
    amount: int = 100,
    line_number: int | None = None,
) -> EntitlementRecord:
    """Create a single EntitlementRecord."""
    return EntitlementRecord(address=address, amount=amount, line_number=line_number)


def make_records(count: int, base_amount: int = 1000) -> list[EntitlementRecord]:
    """Create `count` records with distinct addresses and amounts."""
    return [
        make_record(make_address(i + 1), base_amount + i * 7, line_number=i + 2)
        for i in range(count)
    ]


def make_two_records() -> list[EntitlementRecord]:
    """The (0xAAAA...01, 100), (0xBBBB...02, 50) pair."""
    return [
        make_record(ADDRESS_A, 100, line_number=2),
        make_record(ADDRESS_B, 50, line_number=3),
    ]


# =============================================================================
# Raw Input Factories
# =============================================================================

def make_input_text(
    rows: Iterable[Sequence[object]],
    header: str = DEFAULT_HEADER,
    trailing_newline: bool = True,
) -> str:
    """Render rows as input text with a header line."""
    lines = [header]
    lines.extend(",".join(str(field) for field in row) for row in rows)
    text = "\n".join(lines)
    return text + "\n" if trailing_newline else text


def records_to_rows(records: Iterable[EntitlementRecord]) -> list[tuple[str, int]]:
    """Turn records back into (address, amount) rows."""
    return [(r.address, r.amount) for r in records]


def write_input_file(path: Path, rows: Iterable[Sequence[object]]) -> Path:
    """Write an input file and return its path."""
    path.write_text(make_input_text(rows), encoding="utf-8")
    return path
