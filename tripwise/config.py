"""Configuration for TripWise.

Settings come from environment variables, optionally loaded from a
``.env`` file in the working directory. Everything has a default so the
app runs without any configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


@dataclass
class Settings:
    osrm_url: str = os.getenv("TRIPWISE_OSRM_URL", "https://router.project-osrm.org")
    osrm_profile: str = os.getenv("TRIPWISE_OSRM_PROFILE", "foot")
    walk_speed_kmh: float = float(os.getenv("TRIPWISE_WALK_SPEED_KMH", "5.0"))
    request_timeout: float = float(os.getenv("TRIPWISE_REQUEST_TIMEOUT", "30"))
    plans_path: Path = Path(os.getenv("TRIPWISE_PLANS_PATH", "tripwise_plans.json"))
    user_agent: str = os.getenv("TRIPWISE_USER_AGENT", "tripwise_app")
    log_level: str = os.getenv("TRIPWISE_LOG_LEVEL", "INFO")


settings = Settings()
