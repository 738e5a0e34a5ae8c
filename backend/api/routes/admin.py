"""Administrator login and dashboard overview."""

import logging

from fastapi import APIRouter, HTTPException

from api.deps import StoreDep
from schemas.requests import AdminLogin

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login")
async def login(body: AdminLogin, store: StoreDep):
    admin = await store.authenticate_admin(body.username, body.password)
    if not admin:
        logger.warning("Failed admin login for '%s'", body.username)
        raise HTTPException(401, "Invalid username or password")
    return {k: v for k, v in admin.items() if k != "password"}


@router.get("/overview")
async def overview(store: StoreDep):
    return await store.get_overview()
