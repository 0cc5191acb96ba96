from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from .advisor_service import GeminiAdvisor
from .advisory import RecommendationService
from .catalog_loader import CatalogLoader
from .config import Settings, load_settings
from .filter_engine import category_tabs
from .models import (
    CategoryRequest,
    ChatRequest,
    CompareReplaceRequest,
    NavigateRequest,
    Record,
    SearchRequest,
    SessionSnapshot,
    View,
)
from .session import BrowserSession
from .session_registry import SessionRegistry

BASE_DIR = Path(__file__).resolve().parent

log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
log_level = getattr(logging, log_level_name, logging.INFO)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

logging.getLogger("motocat").setLevel(log_level)
logger = logging.getLogger("motocat.app")

ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=True)


def create_app(settings: Optional[Settings] = None, service: Optional[RecommendationService] = None) -> FastAPI:
    """Purpose: Build the JSON surface the renderer drives the browser through.
    Inputs/Outputs: Optional Settings and recommendation service; returns a FastAPI app.
    Side Effects / State: Loads the catalog once; sessions live only in memory.
    Dependencies: CatalogLoader, GeminiAdvisor, SessionRegistry, BrowserSession.
    Failure Modes: Catalog load errors propagate and abort startup.
    Testing Notes: Pass a fake service and drive endpoints with TestClient.
    """
    settings = settings or load_settings()
    records, meta = CatalogLoader(settings.catalog_path).load()
    advisor = service or GeminiAdvisor(settings, records)

    def new_session(session_id: Optional[str]) -> BrowserSession:
        return BrowserSession(
            records,
            advisor,
            session_id=session_id,
            advisor_timeout=settings.advisor_timeout,
        )

    registry = SessionRegistry(new_session, max_sessions=settings.max_sessions)

    app = FastAPI(title="KYMCO Motorcycle Catalog")
    app.state.registry = registry
    app.state.catalog_meta = meta

    # Handlers are async so every session mutation runs on the event loop thread.

    def lookup(session_id: str) -> BrowserSession:
        try:
            return registry.get(session_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")

    @app.get("/api/catalog", response_model=List[Record])
    async def get_catalog() -> List[Record]:
        return list(records)

    @app.get("/api/categories")
    async def get_categories() -> List[str]:
        return category_tabs()

    @app.post("/api/sessions", response_model=SessionSnapshot)
    async def create_session() -> SessionSnapshot:
        return registry.create().snapshot()

    @app.get("/api/sessions/{session_id}", response_model=SessionSnapshot)
    async def get_session(session_id: str) -> SessionSnapshot:
        return lookup(session_id).snapshot()

    @app.post("/api/sessions/{session_id}/search", response_model=SessionSnapshot)
    async def set_search(session_id: str, request: SearchRequest) -> SessionSnapshot:
        session = lookup(session_id)
        session.set_search(request.search)
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/category", response_model=SessionSnapshot)
    async def set_category(session_id: str, request: CategoryRequest) -> SessionSnapshot:
        session = lookup(session_id)
        try:
            session.set_category(request.category)
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Unknown category: {request.category}")
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/records/{record_id}", response_model=SessionSnapshot)
    async def open_record(session_id: str, record_id: str) -> SessionSnapshot:
        session = lookup(session_id)
        try:
            session.open_record(record_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown record: {record_id}")
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/back", response_model=SessionSnapshot)
    async def back(session_id: str) -> SessionSnapshot:
        session = lookup(session_id)
        session.back()
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/navigate", response_model=SessionSnapshot)
    async def navigate(session_id: str, request: NavigateRequest) -> SessionSnapshot:
        session = lookup(session_id)
        if request.view is View.DETAIL:
            raise HTTPException(status_code=422, detail="Open a record to show the detail view")
        session.navigate(request.view)
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/compare/open", response_model=SessionSnapshot)
    async def open_compare(session_id: str) -> SessionSnapshot:
        session = lookup(session_id)
        session.open_compare()
        return session.snapshot()

    @app.put("/api/sessions/{session_id}/compare", response_model=SessionSnapshot)
    async def replace_compare(session_id: str, request: CompareReplaceRequest) -> SessionSnapshot:
        session = lookup(session_id)
        session.replace_compare(request.ids)
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/compare/{record_id}", response_model=SessionSnapshot)
    async def toggle_compare(session_id: str, record_id: str) -> SessionSnapshot:
        session = lookup(session_id)
        session.toggle_compare(record_id)
        return session.snapshot()

    @app.post("/api/sessions/{session_id}/chat", response_model=SessionSnapshot)
    async def chat(session_id: str, request: ChatRequest, wait: bool = False) -> SessionSnapshot:
        """Submit a chat message. By default the snapshot is returned right away with
        pending set; wait=true holds the response until the advisor has replied."""
        session = lookup(session_id)
        task = session.submit_chat(request.message)
        if task is not None and wait:
            await task
        return session.snapshot()

    logger.info("catalog loaded file=%s records=%d", meta.file_name, meta.count)
    return app


app = create_app()
