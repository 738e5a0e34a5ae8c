"""FastAPI dependencies and require-helpers for routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from store import PetStore


def get_store(request: Request) -> PetStore:
    """Return the app's PetStore. Use in Depends()."""
    return request.app.state.store


StoreDep = Annotated[PetStore, Depends(get_store)]


async def require_pet(pet_id: int, store: StoreDep) -> dict:
    """Load pet by id or raise 404. Use as Depends(require_pet) with pet_id in path."""
    pet = await store.get_pet(pet_id)
    if not pet:
        raise HTTPException(404, f"Pet '{pet_id}' not found")
    return pet


async def require_owner(owner_id: int, store: StoreDep) -> dict:
    """Load owner by id or raise 404."""
    owner = await store.get_owner(owner_id)
    if not owner:
        raise HTTPException(404, f"Owner '{owner_id}' not found")
    return owner
