"""Request body models for PetCare API."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _strip(value: str) -> str:
    return value.strip()


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


class PetCreate(BaseModel):
    name: str
    breed: str = ""
    age: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    owner_name: str
    owner_id: Optional[int] = None

    check_names = field_validator("name", "owner_name")(_not_blank)
    strip_breed = field_validator("breed")(_strip)


class PetUpdate(PetCreate):
    pass


class OwnerCreate(BaseModel):
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""

    check_name = field_validator("name")(_not_blank)


class MedicalRecordCreate(BaseModel):
    type: str
    description: str = ""
    date: str
    vet_name: str = ""


class AppointmentCreate(BaseModel):
    type: str
    date: str
    time: str = ""
    description: str = ""


class ReminderCreate(BaseModel):
    type: str
    title: str
    description: str = ""
    date: str


class ReminderStatusUpdate(BaseModel):
    is_completed: bool


class AdminLogin(BaseModel):
    username: str
    password: str
