"""Runtime settings for the engine, CLI and service."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "RNAIFORGE_"
MAX_THREADS = 8


class EngineSettings(BaseModel):
    """Knobs that are not part of the design parameters."""

    num_threads: int = Field(default=1, ge=1, description="Worker threads for candidate scoring")
    seed: Optional[int] = Field(default=None, description="Seed for all noise draws")
    log_level: str = Field(default="INFO", description="Level applied to the rnaiforge loggers")
    store_dir: Optional[Path] = Field(default=None, description="Directory mirroring persisted records as JSON")

    @field_validator("num_threads")
    @classmethod
    def cap_threads(cls, v: int) -> int:
        return min(MAX_THREADS, v)

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Read ``RNAIFORGE_*`` environment variables."""
        values: dict[str, object] = {}
        threads = os.environ.get(f"{ENV_PREFIX}NUM_THREADS")
        if threads:
            values["num_threads"] = int(threads)
        seed = os.environ.get(f"{ENV_PREFIX}SEED")
        if seed:
            values["seed"] = int(seed)
        level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
        if level:
            values["log_level"] = level.upper()
        store_dir = os.environ.get(f"{ENV_PREFIX}STORE_DIR")
        if store_dir:
            values["store_dir"] = Path(store_dir)
        return cls.model_validate(values)
