import asyncio

import pytest

from moto_catalog.advisor_service import AdvisorUnavailable, GeminiAdvisor, build_catalog_summary
from moto_catalog.gemini_client import GeminiClient, normalize_model_name, user_contents


class StubClient:
    model_name = "gemini-test"

    def __init__(self, answer="推荐 CT 350。"):
        self.answer = answer
        self.calls = []

    def generate_content(self, contents, system_instruction=None, **kwargs):
        self.calls.append((contents, system_instruction))
        return self.answer


def test_catalog_summary_lists_every_record(shipped_catalog):
    summary = build_catalog_summary(shipped_catalog)
    lines = summary.splitlines()
    assert len(lines) == len(shipped_catalog)
    assert lines[0].startswith("- AK 550 Premium（AK，踏板，¥139800）")
    assert "displacement=550.4 cc" in lines[0]


def test_system_instruction_embeds_catalog(settings, shipped_catalog):
    advisor = GeminiAdvisor(settings, shipped_catalog, client_factory=lambda s: StubClient())
    assert "光阳智选顾问" in advisor.system_instruction
    assert "Like 150" in advisor.system_instruction
    assert "<<CATALOG>>" not in advisor.system_instruction


def test_recommend_sends_user_text_only(settings, shipped_catalog):
    stub = StubClient()
    advisor = GeminiAdvisor(settings, shipped_catalog, client_factory=lambda s: stub)
    answer = asyncio.run(advisor.recommend("推荐一辆代步车"))
    assert answer == "推荐 CT 350。"
    contents, system_instruction = stub.calls[0]
    assert contents == user_contents("推荐一辆代步车")
    assert system_instruction == advisor.system_instruction


def test_empty_answer_raises(settings, shipped_catalog):
    advisor = GeminiAdvisor(settings, shipped_catalog, client_factory=lambda s: StubClient(answer=""))
    with pytest.raises(AdvisorUnavailable):
        asyncio.run(advisor.recommend("hi"))


def test_missing_api_key_raises_unavailable(settings, shipped_catalog):
    advisor = GeminiAdvisor(settings, shipped_catalog)
    with pytest.raises(AdvisorUnavailable):
        asyncio.run(advisor.recommend("hi"))


def test_gemini_client_requires_key(settings):
    with pytest.raises(ValueError):
        GeminiClient(settings)


def test_normalize_model_name():
    assert normalize_model_name(" models/gemini-2.5-flash ") == "gemini-2.5-flash"
    assert normalize_model_name("gemini-2.5-pro") == "gemini-2.5-pro"
    assert normalize_model_name(None) == ""
