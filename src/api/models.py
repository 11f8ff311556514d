"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field content rules (lengths, emptiness) are enforced by the domain layer.
"""

from pydantic import BaseModel


class SetAuthorityRequest(BaseModel):
    """Request model for installing the registry authority."""

    principal: str


class AuthorityResponse(BaseModel):
    authority: str


class PolicyValueRequest(BaseModel):
    """Request model for policy changes (capacity or creation fee)."""

    value: int


class ConfigResponse(BaseModel):
    """Current registry policy."""

    authority: str | None
    max_identities: int
    creation_fee: int


class RegisterIdentityRequest(BaseModel):
    """Request model for identity registration."""

    pseudonym: str
    public_key: str
    metadata: str = ""


class RegisterIdentityResponse(BaseModel):
    id: int


class UpdateIdentityRequest(BaseModel):
    """Request model for renaming an identity and replacing its metadata."""

    pseudonym: str
    metadata: str = ""


class IdentityResponse(BaseModel):
    """Response model for an identity record."""

    id: int
    pseudonym: str
    public_key: str
    created_at: int
    status: bool
    metadata: str
    creator: str


class IdentityCountResponse(BaseModel):
    count: int


class PseudonymStatusResponse(BaseModel):
    pseudonym: str
    registered: bool


class SetAttributeRequest(BaseModel):
    value: str


class AttributeResponse(BaseModel):
    key: str
    value: str
    updated_at: int


class SetRecoveryKeyRequest(BaseModel):
    recovery_key: str


class RecoveryKeyResponse(BaseModel):
    recovery_key: str


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """
    Standard error response model.

    detail carries the error kind; code its numeric code (absent for
    failures that are not registry error kinds).
    """

    detail: str
    code: int | None = None
