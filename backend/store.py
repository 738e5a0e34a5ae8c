"""
PetCare Persistence Layer
Six record collections, each stored as one JSON array under one key of a
key-value substrate (see repositories.StoreProtocol).

  pets             Pet records, optionally linked to an owner by owner_id
  owners           Owner records
  medical_records  per-pet medical history
  appointments     per-pet appointments (status "scheduled" on create)
  reminders        per-pet reminders (is_completed toggled in place)
  admins           seeded once with the default administrator

Every mutation is a full read-modify-write of its collection, serialized by
one asyncio.Lock per collection key. There is no referential integrity:
deleting an owner or pet leaves dependent records in place.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from config import get_settings
from repositories import FileStore, MemoryStore, StoreProtocol

logger = logging.getLogger(__name__)

PETS_KEY = "pets"
MEDICAL_RECORDS_KEY = "medical_records"
APPOINTMENTS_KEY = "appointments"
REMINDERS_KEY = "reminders"
OWNERS_KEY = "owners"
ADMINS_KEY = "admins"

COLLECTION_KEYS = (
    PETS_KEY,
    MEDICAL_RECORDS_KEY,
    APPOINTMENTS_KEY,
    REMINDERS_KEY,
    OWNERS_KEY,
    ADMINS_KEY,
)

APPOINTMENT_SCHEDULED = "scheduled"

_UNSET = object()


class StoreError(Exception):
    """Base for store failures with a machine-readable code."""
    def __init__(self, message: str, code: str = "store_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CorruptCollectionError(StoreError):
    """A collection blob exists but is not a JSON array."""
    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Collection '{key}' is corrupt: {reason}", code="corrupt_collection")


# ── Internal helpers ───────────────────────────────────────────────────

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> Optional[float]:
    """ISO-8601 date or datetime string -> POSIX seconds. None if unusable.

    Naive values are read as UTC and a trailing "Z" is accepted.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _as_utc(parsed).timestamp()


def _record_id(record: dict) -> int:
    rid = record.get("id")
    if isinstance(rid, int) and not isinstance(rid, bool):
        return rid
    return 0


def sort_newest_first(records: list[dict], field: str) -> list[dict]:
    """Sort by ``field`` descending; unparseable or missing values go last.

    Ties (and the unparseable tail) are ordered by id descending.
    """
    def key(record: dict) -> tuple:
        ts = parse_timestamp(record.get(field))
        if ts is None:
            return (1, 0.0, -_record_id(record))
        return (0, -ts, -_record_id(record))

    return sorted(records, key=key)


class IdGenerator:
    """Millisecond-clock ids that never repeat, even if the clock stalls or steps back."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._last = 0

    def next_id(self, floor: int = 0) -> int:
        now_ms = int(_as_utc(self._clock()).timestamp() * 1000)
        new_id = max(now_ms, self._last + 1, floor + 1)
        self._last = new_id
        return new_id


# ── Store ──────────────────────────────────────────────────────────────

class PetStore:
    """Collection-scoped CRUD and query operations over a StoreProtocol backend."""

    def __init__(
        self,
        backend: StoreProtocol,
        clock: Optional[Callable[[], datetime]] = None,
        admin_username: str = "admin",
        admin_password: str = "admin123",
        admin_name: str = "System Administrator",
    ):
        self.backend = backend
        self._clock = clock or _utcnow
        self._ids = IdGenerator(self._clock)
        self._locks = {key: asyncio.Lock() for key in COLLECTION_KEYS}
        self._admin_username = admin_username
        self._admin_password = admin_password
        self._admin_name = admin_name

    def _now_iso(self) -> str:
        return _as_utc(self._clock()).isoformat()

    async def _load(self, key: str) -> list[dict]:
        blob = await self.backend.get(key)
        if not blob:
            return []
        try:
            records = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.error("Collection '%s' holds invalid JSON: %s", key, e)
            raise CorruptCollectionError(key, f"invalid JSON ({e.msg})") from e
        if not isinstance(records, list):
            logger.error("Collection '%s' is a %s, not an array", key, type(records).__name__)
            raise CorruptCollectionError(key, f"expected a JSON array, got {type(records).__name__}")
        if not all(isinstance(r, dict) for r in records):
            logger.error("Collection '%s' holds non-object entries", key)
            raise CorruptCollectionError(key, "expected an array of objects")
        return records

    async def _save(self, key: str, records: list[dict]) -> None:
        await self.backend.set(key, json.dumps(records, ensure_ascii=False))

    async def _insert(self, key: str, fields: dict, stamp_created: bool = True) -> int:
        async with self._locks[key]:
            records = await self._load(key)
            floor = max((_record_id(r) for r in records), default=0)
            record = {"id": self._ids.next_id(floor), **fields}
            if stamp_created:
                record["created_at"] = self._now_iso()
            records.append(record)
            await self._save(key, records)
        logger.debug("%s: added id=%s", key, record["id"])
        return record["id"]

    async def _modify(self, key: str, record_id: int, changes: dict) -> bool:
        async with self._locks[key]:
            records = await self._load(key)
            for record in records:
                if record.get("id") == record_id:
                    record.update(changes)
                    break
            else:
                logger.info("%s: no record with id=%s, nothing updated", key, record_id)
                return False
            await self._save(key, records)
        return True

    async def _remove(self, key: str, record_id: int) -> None:
        async with self._locks[key]:
            records = await self._load(key)
            kept = [r for r in records if r.get("id") != record_id]
            if len(kept) == len(records):
                logger.debug("%s: no record with id=%s to delete", key, record_id)
                return
            await self._save(key, kept)
        logger.info("%s: deleted id=%s", key, record_id)

    async def _find(self, key: str, record_id: int) -> Optional[dict]:
        for record in await self._load(key):
            if record.get("id") == record_id:
                return record
        return None

    async def _query(self, key: str, sort_field: str, where: Optional[dict] = None) -> list[dict]:
        records = await self._load(key)
        if where:
            records = [
                r for r in records
                if all(r.get(field) == value for field, value in where.items())
            ]
        return sort_newest_first(records, sort_field)

    # Initialization
    def _default_admin(self) -> dict:
        return {
            "id": 1,
            "username": self._admin_username,
            "password": self._admin_password,
            "name": self._admin_name,
            "role": "admin",
            "created_at": self._now_iso(),
        }

    async def initialize(self) -> None:
        """Create every absent collection. Existing collections are left untouched."""
        for key in COLLECTION_KEYS:
            async with self._locks[key]:
                if await self.backend.get(key):
                    continue
                seed = [self._default_admin()] if key == ADMINS_KEY else []
                await self._save(key, seed)
                if seed:
                    logger.info("Seeded '%s' with default administrator '%s'", key, self._admin_username)
                else:
                    logger.info("Created empty collection '%s'", key)

    # Pets
    async def add_pet(
        self,
        name: str,
        breed: str,
        age: Optional[int],
        weight: Optional[float],
        owner_name: str,
        owner_id: Optional[int] = None,
    ) -> int:
        return await self._insert(PETS_KEY, {
            "name": name,
            "breed": breed,
            "age": age,
            "weight": weight,
            "owner_id": owner_id,
            "owner_name": owner_name,
        })

    async def get_pets(self) -> list[dict]:
        return await self._query(PETS_KEY, "created_at")

    async def get_pet(self, pet_id: int) -> Optional[dict]:
        return await self._find(PETS_KEY, pet_id)

    async def get_pets_by_owner(self, owner_id: int) -> list[dict]:
        """Pets linked to an existing owner. A deleted owner has no pets, though
        the pet records themselves still carry its id."""
        if await self._find(OWNERS_KEY, owner_id) is None:
            return []
        return await self._query(PETS_KEY, "created_at", {"owner_id": owner_id})

    async def update_pet(
        self,
        pet_id: int,
        name: str,
        breed: str,
        age: Optional[int],
        weight: Optional[float],
        owner_name: str,
        owner_id: Any = _UNSET,
    ) -> bool:
        """Replace a pet's mutable fields. id and created_at are preserved.

        owner_id is kept as stored unless passed explicitly. Returns False when
        no pet has ``pet_id``; that case is not an error.
        """
        changes = {
            "name": name,
            "breed": breed,
            "age": age,
            "weight": weight,
            "owner_name": owner_name,
        }
        if owner_id is not _UNSET:
            changes["owner_id"] = owner_id
        return await self._modify(PETS_KEY, pet_id, changes)

    async def delete_pet(self, pet_id: int) -> None:
        await self._remove(PETS_KEY, pet_id)

    # Owners
    async def add_owner(self, name: str, email: str, phone: str, address: str) -> int:
        return await self._insert(OWNERS_KEY, {
            "name": name,
            "email": email,
            "phone": phone,
            "address": address,
        })

    async def get_owners(self) -> list[dict]:
        return await self._query(OWNERS_KEY, "created_at")

    async def get_owner(self, owner_id: int) -> Optional[dict]:
        return await self._find(OWNERS_KEY, owner_id)

    async def delete_owner(self, owner_id: int) -> None:
        """Remove the owner only. Pets pointing at it keep their owner_id."""
        await self._remove(OWNERS_KEY, owner_id)

    # Medical records
    async def add_medical_record(
        self, pet_id: int, record_type: str, description: str, date: str, vet_name: str
    ) -> int:
        return await self._insert(MEDICAL_RECORDS_KEY, {
            "pet_id": pet_id,
            "type": record_type,
            "description": description,
            "date": date,
            "vet_name": vet_name,
        }, stamp_created=False)

    async def get_medical_records(self, pet_id: int) -> list[dict]:
        return await self._query(MEDICAL_RECORDS_KEY, "date", {"pet_id": pet_id})

    # Appointments
    async def add_appointment(
        self, pet_id: int, appointment_type: str, date: str, time: str, description: str
    ) -> int:
        return await self._insert(APPOINTMENTS_KEY, {
            "pet_id": pet_id,
            "type": appointment_type,
            "date": date,
            "time": time,
            "description": description,
            "status": APPOINTMENT_SCHEDULED,
        }, stamp_created=False)

    async def get_appointments(self, pet_id: Optional[int] = None) -> list[dict]:
        """Appointments for one pet, or for all pets when pet_id is None."""
        where = {"pet_id": pet_id} if pet_id is not None else None
        return await self._query(APPOINTMENTS_KEY, "date", where)

    async def get_all_appointments(self) -> list[dict]:
        return await self.get_appointments()

    # Reminders
    async def add_reminder(
        self, pet_id: int, reminder_type: str, title: str, description: str, date: str
    ) -> int:
        return await self._insert(REMINDERS_KEY, {
            "pet_id": pet_id,
            "type": reminder_type,
            "title": title,
            "description": description,
            "date": date,
            "is_completed": False,
        }, stamp_created=False)

    async def get_reminders(self, pet_id: Optional[int] = None) -> list[dict]:
        """Reminders for one pet, or for all pets when pet_id is None."""
        where = {"pet_id": pet_id} if pet_id is not None else None
        return await self._query(REMINDERS_KEY, "date", where)

    async def get_all_reminders(self) -> list[dict]:
        return await self.get_reminders()

    async def update_reminder_status(self, reminder_id: int, is_completed: bool) -> bool:
        return await self._modify(REMINDERS_KEY, reminder_id, {"is_completed": bool(is_completed)})

    # Administrators
    async def authenticate_admin(self, username: str, password: str) -> Optional[dict]:
        # Plaintext comparison. Not suitable for real credential storage.
        for admin in await self._load(ADMINS_KEY):
            if admin.get("username") == username and admin.get("password") == password:
                return admin
        return None

    # Overview
    async def get_overview(self, now: Optional[datetime] = None) -> dict:
        """Counts shown on the admin dashboard."""
        cutoff = _as_utc(now or self._clock()).timestamp()
        pets, owners, appointments, reminders = await asyncio.gather(
            self._load(PETS_KEY),
            self._load(OWNERS_KEY),
            self._load(APPOINTMENTS_KEY),
            self._load(REMINDERS_KEY),
        )
        upcoming = 0
        for appt in appointments:
            ts = parse_timestamp(appt.get("date"))
            if appt.get("status") == APPOINTMENT_SCHEDULED and ts is not None and ts > cutoff:
                upcoming += 1
        return {
            "total_pets": len(pets),
            "total_owners": len(owners),
            "upcoming_appointments": upcoming,
            "pending_reminders": sum(1 for r in reminders if not r.get("is_completed")),
        }


def build_store(settings=None) -> PetStore:
    """Construct a PetStore on the backend selected by PETCARE_STORAGE."""
    settings = settings or get_settings()
    if settings.PETCARE_STORAGE == "memory":
        backend = MemoryStore()
    else:
        backend = FileStore(settings.PETCARE_DATA_DIR)
    logger.info("Using %s storage", settings.PETCARE_STORAGE)
    return PetStore(
        backend,
        admin_username=settings.PETCARE_ADMIN_USERNAME,
        admin_password=settings.PETCARE_ADMIN_PASSWORD,
        admin_name=settings.PETCARE_ADMIN_NAME,
    )
