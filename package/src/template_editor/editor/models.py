"""
Template Editor Data Model

In-memory records owned by one editing session, plus the fixed option sets
offered to the user.
"""

import itertools
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Union


class KeywordCategory(str, Enum):
    """Categories a scoring keyword can belong to."""

    TECHNICAL = "technical"
    SOFT_SKILLS = "soft_skills"
    EXPERIENCE = "experience"
    GENERAL = "general"


# Allowed per-question time limits in seconds, with their display labels
TIME_LIMIT_LABELS: Dict[int, str] = {
    30: "30 seconds",
    60: "1 minute",
    90: "1.5 minutes",
    120: "2 minutes",
    180: "3 minutes",
    300: "5 minutes",
}
TIME_LIMITS = tuple(TIME_LIMIT_LABELS)
DEFAULT_TIME_LIMIT = 90

KEYWORD_WEIGHTS = (1, 2, 3, 5)
DEFAULT_WEIGHT = 1

KEYWORD_CATEGORIES = tuple(c.value for c in KeywordCategory)
DEFAULT_CATEGORY = KeywordCategory.TECHNICAL.value

CATEGORY_ICONS = {
    "technical": "🔧",
    "soft_skills": "🤝",
    "experience": "💼",
    "general": "📋",
}


_pending_counter = itertools.count(1)


@dataclass(frozen=True)
class PendingId:
    """Id of an entry that exists only on the client and was never saved."""
    token: str

    @classmethod
    def new(cls) -> "PendingId":
        # time alone collides when two rows are added within the same tick
        return cls(f"{time.time_ns()}-{next(_pending_counter)}")

    @property
    def is_pending(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"pending:{self.token}"


@dataclass(frozen=True)
class PersistedId:
    """Id assigned by the backend."""
    value: str

    @property
    def is_pending(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.value


EntryId = Union[PendingId, PersistedId]


def as_entry_id(raw: Union[str, int, EntryId]) -> EntryId:
    """Wrap a raw backend id; pass through ids that are already typed."""
    if isinstance(raw, (PendingId, PersistedId)):
        return raw
    return PersistedId(str(raw))


@dataclass
class Question:
    """One interview question. ``order`` is its 1-based position in the list."""
    id: EntryId
    text: str = ""
    time_limit: int = DEFAULT_TIME_LIMIT
    order: int = 1

    EDITABLE_FIELDS = ("text", "time_limit")


@dataclass
class Keyword:
    """A scoring keyword. ``keyword`` is stored trimmed and lowercased."""
    id: EntryId
    keyword: str
    category: str = DEFAULT_CATEGORY
    weight: int = DEFAULT_WEIGHT

    EDITABLE_FIELDS = ("keyword", "category", "weight")


@dataclass
class KeywordDraft:
    """Input buffer for the "new keyword" row."""
    text: str = ""
    category: str = DEFAULT_CATEGORY
    weight: int = DEFAULT_WEIGHT


@dataclass
class TemplateState:
    """Everything the editing screen holds for one template."""
    id: str
    title: str = ""
    description: str = ""
    questions: List[Question] = field(default_factory=list)
    keywords: List[Keyword] = field(default_factory=list)

    def snapshot(self) -> "TemplateState":
        """Deep enough copy to compare against later edits."""
        return TemplateState(
            id=self.id,
            title=self.title,
            description=self.description,
            questions=[replace(q) for q in self.questions],
            keywords=[replace(k) for k in self.keywords],
        )


def normalize_keyword(raw: Optional[str]) -> str:
    """Trim and lowercase keyword text."""
    return (raw or "").strip().lower()
