"""
Schemas
File: records.py

Purpose: The typed entitlement record produced by the input parser.
One record per input line; immutable once constructed.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Byte width of an EVM address
ADDRESS_SIZE = 20

# Byte width of the on-chain amount (uint256)
AMOUNT_SIZE = 32

# Exclusive upper bound on amounts
UINT256_LIMIT = 2 ** (AMOUNT_SIZE * 8)


class EntitlementRecord(BaseModel):
    """
    A single (address, amount) entitlement.

    The address is stored lower-cased with its 0x prefix so that the
    same account always maps to the same artifact key.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(
        ...,
        description="0x-prefixed 20-byte address, lower-case",
        pattern=r"^0x[0-9a-f]{40}$",
    )
    amount: int = Field(
        ...,
        description="Entitlement amount, must fit in uint256",
    )
    line_number: int | None = Field(
        default=None,
        description="1-based source line; not part of the commitment",
        ge=1,
    )

    @field_validator("address", mode="before")
    @classmethod
    def normalize_address(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("amount")
    @classmethod
    def check_uint256(cls, v: int) -> int:
        if v < 0 or v >= UINT256_LIMIT:
            raise ValueError("amount must be in the uint256 range")
        return v

    @property
    def address_bytes(self) -> bytes:
        """Raw 20 address bytes."""
        return bytes.fromhex(self.address[2:])


__all__ = [
    "ADDRESS_SIZE",
    "AMOUNT_SIZE",
    "UINT256_LIMIT",
    "EntitlementRecord",
]
