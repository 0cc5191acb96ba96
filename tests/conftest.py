import asyncio
from pathlib import Path

import pytest

from moto_catalog.catalog_loader import CatalogLoader, parse_records
from moto_catalog.config import Settings

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT / "moto_catalog"


class FakeAdvisor:
    """Recommendation service double recording every question it receives."""

    def __init__(self, reply="推荐 Like 150，轻便省油。", error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.questions = []

    async def recommend(self, text):
        self.questions.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def raw_entries():
    return [
        {"id": "a", "name": "CT 350", "series": "Downtown", "category": "踏板", "price": 39800},
        {"id": "b", "name": "KRV 180", "series": "KRV", "category": "运动", "price": 25800},
        {"id": "c", "name": "Like 150", "series": "Like", "category": "复古", "price": 15800},
        {"id": "d", "name": "Retro", "series": "Classic350", "category": "复古", "price": 30000},
        {"id": "e", "name": "F9", "series": "Ionex", "category": "电动", "price": 19800,
         "specs": {"maxPower": "7.2 kW", "motorType": "轮毂电机"}},
    ]


@pytest.fixture()
def catalog(raw_entries):
    return parse_records(raw_entries)


@pytest.fixture()
def shipped_catalog():
    records, _ = CatalogLoader(PACKAGE_DIR / "data" / "catalog.json").load()
    return records


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        gemini_api_key="",
        gemini_model="gemini-2.5-flash",
        catalog_path=PACKAGE_DIR / "data" / "catalog.json",
        prompts_dir=PACKAGE_DIR / "prompts",
        advisor_timeout=1.0,
        max_sessions=2,
    )


@pytest.fixture()
def fake_advisor():
    return FakeAdvisor()


@pytest.fixture()
def make_advisor():
    return FakeAdvisor
