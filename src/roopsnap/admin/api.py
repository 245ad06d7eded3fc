from __future__ import annotations

from fastapi import APIRouter, Depends

from roopsnap.admin.schemas import AdminVerifyResponse
from roopsnap.auth.depends import AdminPrincipal, authenticate_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/verify", response_model=AdminVerifyResponse)
async def verify(
    principal: AdminPrincipal = Depends(authenticate_admin),
) -> AdminVerifyResponse:
    return AdminVerifyResponse(status="OK", via=principal.via)
