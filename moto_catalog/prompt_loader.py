from __future__ import annotations

from pathlib import Path
from typing import Dict


def load_prompt(prompt_path: Path) -> str:
    """Purpose: Read a prompt template as UTF-8, dropping a leading BOM.
    Failure Modes: A missing file raises FileNotFoundError; undecodable bytes are dropped.
    """
    raw = prompt_path.read_bytes()
    return raw.decode("utf-8", errors="ignore").lstrip("\ufeff")


def render_prompt(template: str, values: Dict[str, str]) -> str:
    """Substitute <<KEY>> placeholders; unknown placeholders are left as-is."""
    rendered = template
    for key, value in values.items():
        rendered = rendered.replace(f"<<{key}>>", value)
    return rendered
