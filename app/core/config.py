from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    database_url: str
    current_unit_id: int
    default_material_unit: str


@lru_cache()
def get_settings() -> Settings:
    """Settings read once from the environment.

    Injected with ``Depends(get_settings)`` so tests can override them.
    """
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./production_floor.db"),
        current_unit_id=int(os.getenv("CURRENT_UNIT_ID", "2")),
        default_material_unit=os.getenv("DEFAULT_MATERIAL_UNIT", "Nos"),
    )
