"""
governance/api/dependencies.py

Shared FastAPI dependencies for credentials and register services.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from governance.connectors.base import Credentials
from governance.errors import (
    EncodingFailure,
    GovernanceStoreError,
    ResolutionFailure,
    RemoteIOFailure,
    UnknownRecordType,
)
from governance.services.factory import RegisterServices, build_register_services


def get_credentials(
    authorization: str | None = Header(default=None),
    x_tenant_id: str | None = Header(default=None),
) -> Credentials:
    """
    Read the bearer token and tenant id supplied by the upstream session layer.
    """

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    tenant_id = (x_tenant_id or "").strip()
    if not tenant_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing tenant id.")
    return Credentials(access_token=token.strip(), tenant_id=tenant_id)


def get_register_services(credentials: Credentials = Depends(get_credentials)) -> RegisterServices:
    return build_register_services(credentials)


def to_http_exception(exc: GovernanceStoreError) -> HTTPException:
    """
    Map a register failure onto an HTTP error response.
    """

    if isinstance(exc, UnknownRecordType):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, EncodingFailure):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, (ResolutionFailure, RemoteIOFailure)):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=exc.to_dict())
