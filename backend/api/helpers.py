"""Shared helpers for API routes (owner join, pet detail)."""

from typing import Optional


def owner_display_name(pet: dict, owner: Optional[dict]) -> str:
    """Linked owner's current name, falling back to the pet's stored owner_name."""
    if owner and owner.get("name"):
        return owner["name"]
    return pet.get("owner_name") or ""


def pet_detail(
    pet: dict,
    owner: Optional[dict],
    medical_records: list[dict],
    appointments: list[dict],
    reminders: list[dict],
) -> dict:
    """Build the pet detail payload: the pet, its owner and its dependent records."""
    return {
        "pet": pet,
        "owner": owner,
        "owner_display_name": owner_display_name(pet, owner),
        "medical_records": medical_records,
        "appointments": appointments,
        "reminders": reminders,
        "pending_reminders": sum(1 for r in reminders if not r.get("is_completed")),
    }
