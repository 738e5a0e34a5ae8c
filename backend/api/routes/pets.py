"""Pet CRUD, owner filter, pet detail."""

import asyncio
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import StoreDep, require_pet
from api.helpers import pet_detail
from schemas.requests import PetCreate, PetUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pets", tags=["pets"])


@router.get("")
async def list_pets(store: StoreDep, owner_id: Optional[int] = Query(default=None)):
    if owner_id is not None:
        return await store.get_pets_by_owner(owner_id)
    return await store.get_pets()


@router.post("", status_code=201)
async def create_pet(body: PetCreate, store: StoreDep):
    pet_id = await store.add_pet(
        body.name,
        body.breed,
        body.age,
        body.weight,
        body.owner_name,
        owner_id=body.owner_id,
    )
    logger.info("Added pet %s (%s)", pet_id, body.name)
    return {"id": pet_id}


@router.get("/{pet_id}")
async def get_pet(pet: Annotated[dict, Depends(require_pet)]):
    return pet


@router.get("/{pet_id}/detail")
async def get_pet_detail(pet: Annotated[dict, Depends(require_pet)], store: StoreDep):
    owner = None
    if pet.get("owner_id") is not None:
        owner = await store.get_owner(pet["owner_id"])
    records, appointments, reminders = await asyncio.gather(
        store.get_medical_records(pet["id"]),
        store.get_appointments(pet["id"]),
        store.get_reminders(pet["id"]),
    )
    return pet_detail(pet, owner, records, appointments, reminders)


@router.put("/{pet_id}")
async def update_pet(pet_id: int, body: PetUpdate, store: StoreDep):
    kwargs = {}
    if "owner_id" in body.model_fields_set:
        kwargs["owner_id"] = body.owner_id
    updated = await store.update_pet(
        pet_id, body.name, body.breed, body.age, body.weight, body.owner_name, **kwargs
    )
    if not updated:
        raise HTTPException(404, f"Pet '{pet_id}' not found")
    return await store.get_pet(pet_id)


@router.delete("/{pet_id}", status_code=204)
async def delete_pet(pet_id: int, store: StoreDep):
    await store.delete_pet(pet_id)
