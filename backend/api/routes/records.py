"""Per-pet medical records, appointments and reminders, plus cross-pet views."""

import logging

from fastapi import APIRouter, HTTPException

from api.deps import StoreDep
from schemas.requests import (
    AppointmentCreate,
    MedicalRecordCreate,
    ReminderCreate,
    ReminderStatusUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["records"])


# Records are keyed by pet_id only; the pet does not have to exist.

@router.get("/pets/{pet_id}/medical-records")
async def list_medical_records(pet_id: int, store: StoreDep):
    return await store.get_medical_records(pet_id)


@router.post("/pets/{pet_id}/medical-records", status_code=201)
async def create_medical_record(pet_id: int, body: MedicalRecordCreate, store: StoreDep):
    record_id = await store.add_medical_record(
        pet_id, body.type, body.description, body.date, body.vet_name
    )
    return {"id": record_id}


@router.get("/pets/{pet_id}/appointments")
async def list_pet_appointments(pet_id: int, store: StoreDep):
    return await store.get_appointments(pet_id)


@router.post("/pets/{pet_id}/appointments", status_code=201)
async def create_appointment(pet_id: int, body: AppointmentCreate, store: StoreDep):
    appointment_id = await store.add_appointment(
        pet_id, body.type, body.date, body.time, body.description
    )
    return {"id": appointment_id}


@router.get("/pets/{pet_id}/reminders")
async def list_pet_reminders(pet_id: int, store: StoreDep):
    return await store.get_reminders(pet_id)


@router.post("/pets/{pet_id}/reminders", status_code=201)
async def create_reminder(pet_id: int, body: ReminderCreate, store: StoreDep):
    reminder_id = await store.add_reminder(
        pet_id, body.type, body.title, body.description, body.date
    )
    return {"id": reminder_id}


@router.get("/appointments")
async def list_all_appointments(store: StoreDep):
    return await store.get_all_appointments()


@router.get("/reminders")
async def list_all_reminders(store: StoreDep):
    return await store.get_all_reminders()


@router.patch("/reminders/{reminder_id}")
async def set_reminder_status(reminder_id: int, body: ReminderStatusUpdate, store: StoreDep):
    if not await store.update_reminder_status(reminder_id, body.is_completed):
        raise HTTPException(404, f"Reminder '{reminder_id}' not found")
    logger.info("Reminder %s is_completed=%s", reminder_id, body.is_completed)
    return {"id": reminder_id, "is_completed": body.is_completed}
