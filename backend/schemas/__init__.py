"""Pydantic schemas for API request/response."""

from .requests import (
    AdminLogin,
    AppointmentCreate,
    MedicalRecordCreate,
    OwnerCreate,
    PetCreate,
    PetUpdate,
    ReminderCreate,
    ReminderStatusUpdate,
)

__all__ = [
    "AdminLogin",
    "AppointmentCreate",
    "MedicalRecordCreate",
    "OwnerCreate",
    "PetCreate",
    "PetUpdate",
    "ReminderCreate",
    "ReminderStatusUpdate",
]
