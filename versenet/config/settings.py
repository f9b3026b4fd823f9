"""
Application Settings

Environment configuration for the application.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    """Application settings from environment."""

    # Dataset
    data_file: str = "merged_bible_references.json"

    # Analysis parameters
    sample_size: int = 200
    max_depth: int = 6
    iterations: int = 5
    hub_count: int = 30
    top_n: int = 20
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            data_file=os.getenv("VERSENET_DATA_FILE", "merged_bible_references.json"),
            sample_size=_env_int("VERSENET_SAMPLE_SIZE", 200),
            max_depth=_env_int("VERSENET_MAX_DEPTH", 6),
            iterations=_env_int("VERSENET_ITERATIONS", 5),
            hub_count=_env_int("VERSENET_HUB_COUNT", 30),
            top_n=_env_int("VERSENET_TOP_N", 20),
            seed=_env_int("VERSENET_SEED", None),
        )
