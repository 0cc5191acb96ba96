from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


ALL_CATEGORIES = "全部"


class Category(str, Enum):
    """Closed set of catalog categories, valued by their display labels."""
    SCOOTER = "踏板"
    SPORT = "运动"
    RETRO = "复古"
    ADVENTURE = "探险"
    ELECTRIC = "电动"


class View(str, Enum):
    """Screens the browser can show."""
    LIST = "list"
    DETAIL = "detail"
    COMPARE = "compare"
    ADVISORY = "advisory"


class Role(str, Enum):
    USER = "user"
    ADVISOR = "advisor"


class Record(BaseModel):
    """One read-only catalog entry."""
    id: str = Field(min_length=1)
    name: str
    series: str
    category: Category
    price: int
    description: str = ""
    image: str = ""
    specs: Dict[str, str] = Field(default_factory=dict)

    class Config:
        frozen = True


class ChatMessage(BaseModel):
    """Transcript entry tagged with its author."""
    role: Role
    text: str

    class Config:
        frozen = True


class SpecRow(BaseModel):
    key: str
    label: str
    value: str


class SessionSnapshot(BaseModel):
    """Everything the renderer needs to draw the current screen."""
    session_id: str
    view: View
    search: str
    category: str
    visible_records: List[Record]
    no_match: bool
    focused_record: Optional[Record] = None
    detail_specs: List[SpecRow] = Field(default_factory=list)
    compare_ids: List[str]
    compare_records: List[Record]
    show_compare_badge: bool
    chat_input: str
    transcript: List[ChatMessage]
    pending: bool


class SearchRequest(BaseModel):
    search: str = ""


class CategoryRequest(BaseModel):
    category: str


class NavigateRequest(BaseModel):
    view: View


class CompareReplaceRequest(BaseModel):
    ids: List[str]


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint."""
    message: str
