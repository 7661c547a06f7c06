"""
Schemas
File: artifact.py

Purpose: The proof artifact handed to deployment tooling.

Wire format:
    {
      "root": "0x<64 hex>",
      "proofs": {
        "0x<40 hex>": {"amount": "<decimal>", "proof": ["0x<64 hex>", ...]},
        ...
      }
    }

The root initializes the on-chain commitment; each proofs entry is
passed to the verifying contract at claim time.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_DIGEST_PATTERN = r"^0x[0-9a-f]{64}$"
HEX_ADDRESS_PATTERN = r"^0x[0-9a-f]{40}$"


class ProofEntry(BaseModel):
    """Amount and leaf-to-root sibling path for one address."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: str = Field(
        ...,
        description="Entitlement amount as a decimal string",
        pattern=r"^[0-9]+$",
    )
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, leaf to root, 0x-hex",
    )

    @field_validator("proof")
    @classmethod
    def validate_proof_digests(cls, v: list[str]) -> list[str]:
        for digest in v:
            if not re.fullmatch(HEX_DIGEST_PATTERN, digest):
                raise ValueError(f"Proof element is not a 0x-prefixed 32-byte digest: {digest}")
        return v


class ProofArtifact(BaseModel):
    """Root commitment plus one ProofEntry per committed address."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(
        ...,
        description="Merkle root, 0x-hex",
        pattern=HEX_DIGEST_PATTERN,
    )
    proofs: dict[str, ProofEntry] = Field(
        ...,
        description="Lower-case address -> ProofEntry",
        min_length=1,
    )

    @field_validator("proofs")
    @classmethod
    def validate_addresses(cls, v: dict[str, ProofEntry]) -> dict[str, ProofEntry]:
        for address in v:
            if not re.fullmatch(HEX_ADDRESS_PATTERN, address):
                raise ValueError(f"Proof key is not a lower-case 0x address: {address}")
        return v

    def get_entry(self, address: str) -> ProofEntry | None:
        """Look up an entry; the address is matched case-insensitively."""
        return self.proofs.get(address.strip().lower())


__all__ = [
    "HEX_DIGEST_PATTERN",
    "HEX_ADDRESS_PATTERN",
    "ProofEntry",
    "ProofArtifact",
]
