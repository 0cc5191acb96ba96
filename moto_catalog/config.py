from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class Settings:
    """Configuration container for the catalog source, Gemini and runtime limits."""
    gemini_api_key: str
    gemini_model: str
    catalog_path: Path
    prompts_dir: Path
    advisor_timeout: float
    max_sessions: int


def load_settings() -> Settings:
    """Purpose: Load configuration from environment variables and defaults.
    Inputs/Outputs: No inputs; returns a Settings instance.
    Side Effects / State: Reads environment variables and filesystem paths.
    Dependencies: Uses os.getenv and BASE_DIR for default paths.
    Failure Modes: Invalid ADVISOR_TIMEOUT/MAX_SESSIONS values raise ValueError.
    Testing Notes: Verify defaults and overrides via monkeypatched environment.
    """
    # Resolve the catalog file, then build Settings.
    catalog_path = os.getenv("CATALOG_PATH")
    if catalog_path:
        catalog_file = Path(catalog_path)
    else:
        catalog_file = BASE_DIR / "data" / "catalog.json"

    advisor_timeout = float(os.getenv("ADVISOR_TIMEOUT", "30"))
    if advisor_timeout <= 0:
        raise ValueError("ADVISOR_TIMEOUT must be positive")
    max_sessions = int(os.getenv("MAX_SESSIONS", "100"))
    if max_sessions <= 0:
        raise ValueError("MAX_SESSIONS must be positive")

    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        catalog_path=catalog_file,
        prompts_dir=(BASE_DIR / "prompts").resolve(),
        advisor_timeout=advisor_timeout,
        max_sessions=max_sessions,
    )
