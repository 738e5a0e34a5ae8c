"""
PetCare backend configuration.
Single source of truth for environment and app settings.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


def get_settings():
    """Return app settings (use as FastAPI Depends or call directly)."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    APP_TITLE: str = "PetCare API"
    APP_VERSION: str = "1.0.0"
    ALLOWED_ORIGINS: list[str]

    # Storage: "file" (JSON blob per collection) | "memory" (lost on restart)
    PETCARE_STORAGE: Literal["file", "memory"] = "file"
    PETCARE_DATA_DIR: Path

    # Seeded administrator, written once when the admins collection is absent
    PETCARE_ADMIN_USERNAME: str = "admin"
    PETCARE_ADMIN_PASSWORD: str = "admin123"
    PETCARE_ADMIN_NAME: str = "System Administrator"

    def __init__(self):
        origins = os.environ.get("ALLOWED_ORIGINS", "http://localhost:19006")
        self.ALLOWED_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        self.PETCARE_STORAGE = os.environ.get("PETCARE_STORAGE", "file").lower()
        if self.PETCARE_STORAGE not in ("file", "memory"):
            self.PETCARE_STORAGE = "file"
        data_dir = os.environ.get("PETCARE_DATA_DIR", "data")
        self.PETCARE_DATA_DIR = Path(data_dir)
        self.PETCARE_ADMIN_USERNAME = (os.environ.get("PETCARE_ADMIN_USERNAME") or "admin").strip()
        self.PETCARE_ADMIN_PASSWORD = os.environ.get("PETCARE_ADMIN_PASSWORD") or "admin123"
        self.PETCARE_ADMIN_NAME = (
            os.environ.get("PETCARE_ADMIN_NAME") or "System Administrator"
        ).strip()
