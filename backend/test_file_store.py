"""
Tests for the file-backed key-value substrate and store configuration.
Run: pytest backend/test_file_store.py
"""

import asyncio
import json

import pytest

from config import Settings
from repositories import FileStore, MemoryStore, StoreProtocol
from store import PETS_KEY, PetStore, build_store


def run(coro):
    return asyncio.run(coro)


def test_missing_key_reads_none(tmp_path):
    fs = FileStore(tmp_path / "data")
    assert run(fs.get(PETS_KEY)) is None
    assert (tmp_path / "data").is_dir()


def test_set_then_get(tmp_path):
    fs = FileStore(tmp_path)
    run(fs.set("owners", '[{"name": "Zoë"}]'))

    assert run(fs.get("owners")) == '[{"name": "Zoë"}]'
    assert (tmp_path / "owners.json").read_text(encoding="utf-8") == '[{"name": "Zoë"}]'
    assert not list(tmp_path.glob("*.tmp"))
    assert [p.name for p in tmp_path.iterdir()] == ["owners.json"]


@pytest.mark.parametrize("key", ["../escape", "a/b", "", "pets.json"])
def test_rejects_unsafe_keys(tmp_path, key):
    fs = FileStore(tmp_path)
    with pytest.raises(ValueError):
        run(fs.get(key))


def test_backends_satisfy_protocol(tmp_path):
    assert isinstance(FileStore(tmp_path), StoreProtocol)
    assert isinstance(MemoryStore(), StoreProtocol)


def test_records_survive_a_new_store_instance(tmp_path):
    first = PetStore(FileStore(tmp_path))
    run(first.initialize())
    pet_id = run(first.add_pet("Rex", "Beagle", 3, 12.5, "Jo"))

    second = PetStore(FileStore(tmp_path))
    run(second.initialize())
    pets = run(second.get_pets())

    assert [p["id"] for p in pets] == [pet_id]
    assert json.loads((tmp_path / "admins.json").read_text())[0]["username"] == "admin"


def test_build_store_uses_configured_backend(tmp_path, monkeypatch):
    monkeypatch.setenv("PETCARE_STORAGE", "file")
    monkeypatch.setenv("PETCARE_DATA_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("PETCARE_ADMIN_USERNAME", "vet")
    monkeypatch.setenv("PETCARE_ADMIN_PASSWORD", "pw")

    store = build_store(Settings())
    run(store.initialize())

    assert isinstance(store.backend, FileStore)
    assert (tmp_path / "store" / "admins.json").exists()
    assert run(store.authenticate_admin("vet", "pw")) is not None


def test_build_store_memory(monkeypatch):
    monkeypatch.setenv("PETCARE_STORAGE", "memory")
    assert isinstance(build_store(Settings()).backend, MemoryStore)


def test_unknown_storage_falls_back_to_file(monkeypatch, tmp_path):
    monkeypatch.setenv("PETCARE_STORAGE", "postgres")
    monkeypatch.setenv("PETCARE_DATA_DIR", str(tmp_path))
    assert Settings().PETCARE_STORAGE == "file"
