from __future__ import annotations

"""Catalog loader for the motorcycle model list.

Reads catalog.json into immutable Record objects and provides the label table
used when the detail view lists a record's specification fields.
"""

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .models import Record, SpecRow

logger = logging.getLogger("motocat.catalog")

SPEC_LABELS: Dict[str, str] = {
    "engineType": "发动机类型",
    "displacement": "排量",
    "maxPower": "最大功率",
    "maxTorque": "最大扭矩",
    "coolingSystem": "冷却系统",
    "fuelSystem": "供油系统",
    "transmission": "传动系统",
    "fuelCapacity": "油箱容积",
    "seatHeight": "座高",
    "curbWeight": "整备质量",
    "tireFront": "前胎规格",
    "tireRear": "后胎规格",
    "brakingSystem": "制动系统",
    "absTcs": "安全辅助配置",
}


@dataclass
class CatalogMeta:
    """Metadata describing the catalog file version for logging."""
    file_name: str
    updated_at: str
    sha256: str
    count: int


class CatalogLoader:
    def __init__(self, path: Path) -> None:
        # Only remember the location; load() does the reading.
        self._path = path

    def load(self) -> Tuple[List[Record], CatalogMeta]:
        """Purpose: Load and validate catalog records from the JSON file.
        Inputs/Outputs: No inputs; returns the record list and CatalogMeta.
        Side Effects / State: Reads file contents and computes hash/mtime.
        Dependencies: Uses json, hashlib and the pydantic Record model.
        Failure Modes: Missing file raises FileNotFoundError, bad JSON raises
            JSONDecodeError, invalid entries raise ValidationError and duplicate
            ids raise ValueError.
        Testing Notes: Load a temp file with a duplicate id and expect ValueError.
        """
        # Read bytes for hashing, then parse the list of raw entries.
        raw_bytes = self._path.read_bytes()
        sha256 = hashlib.sha256(raw_bytes).hexdigest()
        updated_at = datetime.fromtimestamp(self._path.stat().st_mtime).isoformat()

        data = json.loads(raw_bytes.decode("utf-8-sig"))
        entries: List[Dict[str, Any]]
        if isinstance(data, dict):
            entries = data.get("items", [])
        elif isinstance(data, list):
            entries = data
        else:
            raise ValueError(f"Unsupported catalog layout in {self._path.name}")

        records = parse_records(entries)
        meta = CatalogMeta(
            file_name=self._path.name,
            updated_at=updated_at,
            sha256=sha256,
            count=len(records),
        )
        logger.info("catalog=%s records=%d sha256=%s", meta.file_name, meta.count, meta.sha256[:12])
        return records, meta


def parse_records(entries: List[Dict[str, Any]]) -> List[Record]:
    """Purpose: Validate raw dict entries into Records with unique ids.
    Inputs/Outputs: Input is a list of dicts; output is a list of Record in source order.
    Side Effects / State: None.
    Dependencies: Uses Record validation.
    Failure Modes: ValueError on a duplicate id; ValidationError on bad fields.
    Testing Notes: Order of the output must match the order of the input.
    """
    records: List[Record] = []
    seen: set = set()
    for entry in entries:
        record = Record(**entry)
        if record.id in seen:
            raise ValueError(f"Duplicate record id: {record.id}")
        seen.add(record.id)
        records.append(record)
    return records


def index_by_id(records: List[Record]) -> Dict[str, Record]:
    return {record.id: record for record in records}


def labelled_specs(record: Record) -> List[SpecRow]:
    """Purpose: Pair each spec field with its display label.
    Inputs/Outputs: Input is a Record; output is SpecRow list in the record's key order.
    Side Effects / State: None.
    Dependencies: Uses SPEC_LABELS.
    Failure Modes: None; unknown keys are shown under their raw key.
    Testing Notes: Check a known key and an unknown key.
    """
    return [
        SpecRow(key=key, label=SPEC_LABELS.get(key, key), value=value)
        for key, value in record.specs.items()
    ]
