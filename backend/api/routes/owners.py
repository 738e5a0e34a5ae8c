"""Owner create, list, get, delete, and owned pets."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.deps import StoreDep, require_owner
from schemas.requests import OwnerCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/owners", tags=["owners"])


@router.get("")
async def list_owners(store: StoreDep):
    return await store.get_owners()


@router.post("", status_code=201)
async def create_owner(body: OwnerCreate, store: StoreDep):
    owner_id = await store.add_owner(body.name, body.email, body.phone, body.address)
    logger.info("Added owner %s (%s)", owner_id, body.name)
    return {"id": owner_id}


@router.get("/{owner_id}")
async def get_owner(owner: Annotated[dict, Depends(require_owner)]):
    return owner


@router.get("/{owner_id}/pets")
async def list_owner_pets(owner_id: int, store: StoreDep):
    # Unknown owner yields an empty list, not a 404.
    return await store.get_pets_by_owner(owner_id)


@router.delete("/{owner_id}", status_code=204)
async def delete_owner(owner_id: int, store: StoreDep):
    await store.delete_owner(owner_id)
