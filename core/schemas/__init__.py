"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    AddressNotFoundError,
    ArtifactFormatError,
    EmptyInputError,
    ErrorCodes,
    MalformedRecordError,
    MerklegenError,
    MerklegenException,
    ProofVerificationError,
    WriteError,
)

# Input records
from .records import (
    ADDRESS_SIZE,
    AMOUNT_SIZE,
    UINT256_LIMIT,
    EntitlementRecord,
)

# Output artifact
from .artifact import (
    ProofArtifact,
    ProofEntry,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "MerklegenError",
    "MerklegenException",
    "MalformedRecordError",
    "EmptyInputError",
    "AddressNotFoundError",
    "ProofVerificationError",
    "WriteError",
    "ArtifactFormatError",
    # Records
    "ADDRESS_SIZE",
    "AMOUNT_SIZE",
    "UINT256_LIMIT",
    "EntitlementRecord",
    # Artifact
    "ProofArtifact",
    "ProofEntry",
]
