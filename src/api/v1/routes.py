"""
API v1 routes.

Defines REST endpoints for the Identity Registry API. Domain failures are
returned as values by the registry service and translated here into HTTP
errors whose body carries the error kind and its numeric code.

Pseudonyms and attribute keys may contain "/", so they use the path converter.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_caller, get_registry
from src.api.models import (
    AttributeResponse,
    AuthorityResponse,
    ConfigResponse,
    ErrorResponse,
    IdentityCountResponse,
    IdentityResponse,
    PolicyValueRequest,
    PseudonymStatusResponse,
    RecoveryKeyResponse,
    RegisterIdentityRequest,
    RegisterIdentityResponse,
    SetAttributeRequest,
    SetAuthorityRequest,
    SetRecoveryKeyRequest,
    SuccessResponse,
    UpdateIdentityRequest,
)
from src.domain.exceptions import OperationFailed
from src.domain.ports import ErrorKind, Result
from src.domain.records import Identity
from src.domain.registry import RegistryService

router = APIRouter(tags=["v1"])

_STATUS_BY_ERROR = {
    ErrorKind.IDENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.IDENTITY_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.MAX_IDENTITIES_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorKind.AUTHORITY_NOT_VERIFIED: status.HTTP_409_CONFLICT,
    ErrorKind.FEE_TRANSFER_FAILED: status.HTTP_402_PAYMENT_REQUIRED,
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid field value"},
    403: {"model": ErrorResponse, "description": "Caller may not modify this record"},
    404: {"model": ErrorResponse, "description": "Identity not found"},
    409: {"model": ErrorResponse, "description": "Registry state conflict"},
}


async def operation_failed_handler(request: Request, exc: OperationFailed) -> JSONResponse:
    """
    Render a failed registry operation.

    Registered on the application for OperationFailed; the body is
    {"detail": <kind>, "code": <numeric code>}.
    """
    return JSONResponse(
        status_code=_STATUS_BY_ERROR.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content=ErrorResponse(detail=exc.kind.value, code=exc.kind.code).model_dump(),
    )


def _check(result: Result) -> Result:
    """Raise OperationFailed for a failed result; pass successes through."""
    if not result.ok:
        raise OperationFailed(result.error)
    return result


def _identity_response(identity: Identity | None) -> IdentityResponse:
    if identity is None:
        raise OperationFailed(ErrorKind.IDENTITY_NOT_FOUND)
    return IdentityResponse(
        id=identity.id,
        pseudonym=identity.pseudonym,
        public_key=identity.public_key,
        created_at=identity.created_at,
        status=identity.status,
        metadata=identity.metadata,
        creator=identity.creator,
    )


@router.post(
    "/authority",
    response_model=AuthorityResponse,
    responses=_ERROR_RESPONSES,
    summary="Set the registry authority",
    description="Install the authority principal. Succeeds only once.",
)
async def set_authority(
    request_data: SetAuthorityRequest,
    registry: RegistryService = Depends(get_registry),
) -> AuthorityResponse:
    _check(registry.set_authority(request_data.principal))
    return AuthorityResponse(authority=request_data.principal)


@router.get("/config", response_model=ConfigResponse, summary="Get registry policy")
async def get_config(registry: RegistryService = Depends(get_registry)) -> ConfigResponse:
    config = registry.get_config()
    return ConfigResponse(
        authority=config.authority,
        max_identities=config.max_identities,
        creation_fee=config.creation_fee,
    )


@router.put(
    "/config/max-identities",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Change the identity capacity",
)
async def set_max_identities(
    request_data: PolicyValueRequest,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> SuccessResponse:
    _check(registry.set_max_identities(request_data.value, caller))
    return SuccessResponse()


@router.put(
    "/config/creation-fee",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Change the creation fee",
)
async def set_creation_fee(
    request_data: PolicyValueRequest,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> SuccessResponse:
    _check(registry.set_creation_fee(request_data.value, caller))
    return SuccessResponse()


@router.post(
    "/identities",
    response_model=RegisterIdentityResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_ERROR_RESPONSES,
        402: {"model": ErrorResponse, "description": "Creation fee transfer failed"},
    },
    summary="Register a new identity",
    description="Bind a unique pseudonym to a public key. "
    "The creation fee is transferred from the caller to the authority.",
)
async def register_identity(
    request_data: RegisterIdentityRequest,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> RegisterIdentityResponse:
    result = _check(
        registry.register_identity(
            request_data.pseudonym,
            request_data.public_key,
            request_data.metadata,
            caller,
        )
    )
    return RegisterIdentityResponse(id=result.value)


@router.get(
    "/identities/count",
    response_model=IdentityCountResponse,
    summary="Count registered identities",
)
async def get_identity_count(
    registry: RegistryService = Depends(get_registry),
) -> IdentityCountResponse:
    return IdentityCountResponse(count=registry.get_identity_count())


@router.get(
    "/identities/by-pseudonym/{pseudonym:path}",
    response_model=IdentityResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="Look up an identity by pseudonym",
)
async def get_identity_by_pseudonym(
    pseudonym: str,
    registry: RegistryService = Depends(get_registry),
) -> IdentityResponse:
    return _identity_response(registry.get_identity_by_pseudonym(pseudonym))


@router.get(
    "/identities/{identity_id}",
    response_model=IdentityResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="Get an identity",
)
async def get_identity(
    identity_id: int,
    registry: RegistryService = Depends(get_registry),
) -> IdentityResponse:
    return _identity_response(registry.get_identity(identity_id))


@router.put(
    "/identities/{identity_id}",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Update an identity",
    description="Rename the identity and replace its metadata. Creator only.",
)
async def update_identity(
    identity_id: int,
    request_data: UpdateIdentityRequest,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> SuccessResponse:
    _check(
        registry.update_identity(
            identity_id, request_data.pseudonym, request_data.metadata, caller
        )
    )
    return SuccessResponse()


@router.post(
    "/identities/{identity_id}/deactivate",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Deactivate an identity",
)
async def deactivate_identity(
    identity_id: int,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> SuccessResponse:
    _check(registry.deactivate_identity(identity_id, caller))
    return SuccessResponse()


@router.put(
    "/identities/{identity_id}/attributes/{key:path}",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Set an identity attribute",
)
async def set_attribute(
    identity_id: int,
    key: str,
    request_data: SetAttributeRequest,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> SuccessResponse:
    _check(registry.set_attribute(identity_id, key, request_data.value, caller))
    return SuccessResponse()


@router.get(
    "/identities/{identity_id}/attributes/{key:path}",
    response_model=AttributeResponse,
    responses={404: {"model": ErrorResponse, "description": "Attribute not set"}},
    summary="Get an identity attribute",
)
async def get_attribute(
    identity_id: int,
    key: str,
    registry: RegistryService = Depends(get_registry),
) -> AttributeResponse:
    attribute = registry.get_attribute(identity_id, key)
    if attribute is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attribute not set")
    return AttributeResponse(key=key, value=attribute.value, updated_at=attribute.updated_at)


@router.put(
    "/identities/{identity_id}/recovery-key",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Set the identity recovery key",
)
async def set_recovery_key(
    identity_id: int,
    request_data: SetRecoveryKeyRequest,
    caller: str = Depends(get_caller),
    registry: RegistryService = Depends(get_registry),
) -> SuccessResponse:
    _check(registry.set_recovery_key(identity_id, request_data.recovery_key, caller))
    return SuccessResponse()


@router.get(
    "/identities/{identity_id}/recovery-key",
    response_model=RecoveryKeyResponse,
    responses={404: {"model": ErrorResponse, "description": "Recovery key not set"}},
    summary="Get the identity recovery key",
)
async def get_recovery_key(
    identity_id: int,
    registry: RegistryService = Depends(get_registry),
) -> RecoveryKeyResponse:
    recovery_key = registry.get_recovery_key(identity_id)
    if recovery_key is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recovery key not set"
        )
    return RecoveryKeyResponse(recovery_key=recovery_key.recovery_key)


@router.get(
    "/pseudonyms/{pseudonym:path}",
    response_model=PseudonymStatusResponse,
    summary="Check whether a pseudonym is registered",
)
async def is_identity_registered(
    pseudonym: str,
    registry: RegistryService = Depends(get_registry),
) -> PseudonymStatusResponse:
    return PseudonymStatusResponse(
        pseudonym=pseudonym, registered=registry.is_identity_registered(pseudonym)
    )
