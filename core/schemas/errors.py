"""
Schemas & Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy across the merklegen pipeline.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

Every failure aborts the run: there is no partial-success mode.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the pipeline."""

    # Input Errors
    MALFORMED_RECORD = "MALFORMED_RECORD"
    EMPTY_INPUT = "EMPTY_INPUT"

    # Tree & Proof Errors
    ADDRESS_NOT_FOUND = "ADDRESS_NOT_FOUND"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Artifact Errors
    WRITE_ERROR = "WRITE_ERROR"
    ARTIFACT_FORMAT_ERROR = "ARTIFACT_FORMAT_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerklegenError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI to emit machine-readable failures (``--json``).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_RECORD],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerklegenException":
        """Convert this error model to a raised exception."""
        return MerklegenException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerklegenException(Exception):
    """
    Base exception for all merklegen errors.

    This exception carries structured error information and can be
    converted to a MerklegenError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLEGEN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerklegenError:
        """Convert this exception to a MerklegenError model."""
        return MerklegenError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedRecordError(MerklegenException):
    """Raised when an input line cannot be parsed into an entitlement record."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if line_number is not None:
            full_details["line_number"] = line_number
            message = f"line {line_number}: {message}"
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_RECORD,
            details=full_details,
        )
        self.line_number = line_number


class EmptyInputError(MerklegenException):
    """Raised when there are no records to commit to."""

    def __init__(
        self,
        message: str = "No entitlement records to build a tree from",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
        )


class AddressNotFoundError(MerklegenException):
    """Raised when a proof is requested for an address outside the committed set."""

    def __init__(
        self,
        address: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["address"] = address
        super().__init__(
            message=f"Address not found in tree: {address}",
            code=ErrorCodes.ADDRESS_NOT_FOUND,
            details=full_details,
        )
        self.address = address


class ProofVerificationError(MerklegenException):
    """Raised when a generated proof does not fold back to the root."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class WriteError(MerklegenException):
    """Raised when the artifact cannot be written. Never retried."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.WRITE_ERROR,
            details=full_details,
        )


class ArtifactFormatError(MerklegenException):
    """Raised when an artifact read back from disk is not a valid proof artifact."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.ARTIFACT_FORMAT_ERROR,
            details=full_details,
        )
