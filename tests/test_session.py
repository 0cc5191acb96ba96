import asyncio

import pytest

from moto_catalog.models import Role, View
from moto_catalog.session import BrowserSession


@pytest.fixture()
def session(catalog, fake_advisor):
    return BrowserSession(catalog, fake_advisor, session_id="s1")


def test_initial_snapshot(session, catalog):
    snap = session.snapshot()
    assert snap.view is View.LIST
    assert snap.category == "全部"
    assert [r.id for r in snap.visible_records] == [r.id for r in catalog]
    assert snap.no_match is False
    assert snap.focused_record is None
    assert snap.show_compare_badge is False
    assert len(snap.transcript) == 1
    assert snap.pending is False


def test_search_and_category_drive_visible_records(session):
    session.set_search("350")
    assert [r.id for r in session.visible_records] == ["a", "d"]
    session.set_category("踏板")
    assert [r.id for r in session.visible_records] == ["a"]
    session.set_search("nothing")
    assert session.snapshot().no_match is True
    with pytest.raises(ValueError):
        session.set_category("卡车")
    assert session.criteria.category == "踏板"


def test_open_record_back_and_reselect(session):
    session.open_record("a")
    snap = session.snapshot()
    assert snap.view is View.DETAIL
    assert snap.focused_record.id == "a"
    session.back()
    assert session.focused_record is None
    session.open_record("e")
    snap = session.snapshot()
    assert snap.focused_record.id == "e"
    assert [row.label for row in snap.detail_specs] == ["最大功率", "motorType"]


def test_open_unknown_record(session):
    with pytest.raises(KeyError):
        session.open_record("ghost")
    assert session.views.view is View.LIST


def test_compare_flow(session):
    for record_id in ["a", "b", "c", "d"]:
        session.toggle_compare(record_id)
    snap = session.snapshot()
    assert snap.compare_ids == ["a", "b", "c"]
    assert [r.id for r in snap.compare_records] == ["a", "b", "c"]
    assert snap.show_compare_badge is True

    session.open_record("d")
    assert session.open_compare() is True
    assert session.views.view is View.COMPARE
    assert session.focused_record is None
    assert session.show_compare_badge is False

    session.replace_compare(["c"])
    assert session.snapshot().compare_ids == ["c"]


def test_navigate_to_list_clears_focus(session):
    session.open_record("b")
    session.navigate(View.ADVISORY)
    assert session.focused_record is None
    session.navigate(View.LIST)
    assert session.views.view is View.LIST


def test_chat_scenario(session, fake_advisor):
    async def scenario():
        task = session.submit_chat("推荐一辆代步车")
        mid = session.snapshot()
        await task
        return mid, session.snapshot()

    mid, done = asyncio.run(scenario())
    assert mid.pending is True
    assert [m.role for m in mid.transcript] == [Role.ADVISOR, Role.USER]
    assert done.pending is False
    assert len(done.transcript) == 3
    assert done.transcript[-1].text == fake_advisor.reply


def test_chat_input_box(session):
    session.set_chat_input("  ")
    assert session.snapshot().chat_input == "  "

    async def scenario():
        return session.submit_chat()

    assert asyncio.run(scenario()) is None
