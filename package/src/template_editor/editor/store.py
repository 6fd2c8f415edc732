"""
Template Store and List Editors

The store is the single source of truth for the editing form. The two list
editors are the only way questions and keywords are mutated, so the ordering
and non-empty invariants hold after every user action.
"""

from collections import OrderedDict
from typing import Any, Dict, List, Optional

from template_editor.editor.exceptions import ValidationError
from template_editor.editor.logging_config import get_logger
from template_editor.editor.models import (
    DEFAULT_TIME_LIMIT,
    DEFAULT_WEIGHT,
    EntryId,
    Keyword,
    KeywordDraft,
    PendingId,
    Question,
    TemplateState,
    normalize_keyword,
)
from template_editor.editor.validators import (
    validate_category,
    validate_keyword_text,
    validate_time_limit,
    validate_weight,
)

logger = get_logger("store")


class TemplateStore:
    """Holds the template being edited."""

    def __init__(self, state: Optional[TemplateState] = None, template_id: str = ""):
        self.state = state or TemplateState(id=template_id)
        self.questions = QuestionListEditor(self)
        self.keywords = KeywordListEditor(self)

    @property
    def template_id(self) -> str:
        return self.state.id

    @property
    def title(self) -> str:
        return self.state.title

    @title.setter
    def title(self, value: str):
        self.state.title = value

    @property
    def description(self) -> str:
        return self.state.description

    @description.setter
    def description(self, value: str):
        self.state.description = value

    def load(self, state: TemplateState):
        """Replace the whole form with freshly loaded data."""
        self.state = state
        self.questions.renumber()


class QuestionListEditor:
    """Append, remove and update questions keeping ``order == position``."""

    def __init__(self, store: TemplateStore):
        self._store = store

    @property
    def items(self) -> List[Question]:
        return self._store.state.questions

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def get(self, entry_id: EntryId) -> Optional[Question]:
        for question in self.items:
            if question.id == entry_id:
                return question
        return None

    def add(self) -> Question:
        """Append an empty question at the end of the list."""
        question = Question(
            id=PendingId.new(),
            text="",
            time_limit=DEFAULT_TIME_LIMIT,
            order=len(self.items) + 1,
        )
        self.items.append(question)
        logger.debug("Added question %s at position %d", question.id, question.order)
        return question

    def remove(self, entry_id: EntryId) -> bool:
        """Remove a question. The last remaining question cannot be removed.

        Returns:
            True if the list changed
        """
        if len(self.items) <= 1:
            logger.debug("Refusing to remove the only question")
            return False

        remaining = [q for q in self.items if q.id != entry_id]
        if len(remaining) == len(self.items):
            return False

        self.items[:] = remaining
        self.renumber()
        logger.debug("Removed question %s, %d left", entry_id, len(self.items))
        return True

    def update_field(self, entry_id: EntryId, field: str, value: Any) -> bool:
        """Replace one field of one question. Does not renumber."""
        if field not in Question.EDITABLE_FIELDS:
            raise ValidationError(
                f"Unknown question field '{field}'",
                field=field,
                expected_format=f"one of {', '.join(Question.EDITABLE_FIELDS)}"
            )

        if field == "time_limit":
            is_valid, message = validate_time_limit(value)
            if not is_valid:
                raise ValidationError(message, field="time_limit")
            value = int(value)
        else:
            value = "" if value is None else str(value)

        question = self.get(entry_id)
        if question is None:
            return False

        setattr(question, field, value)
        return True

    def renumber(self):
        """Rewrite ``order`` as 1..N following list position."""
        for position, question in enumerate(self.items, 1):
            question.order = position


class KeywordListEditor:
    """Append, remove and update keywords, plus the "new keyword" input buffer."""

    def __init__(self, store: TemplateStore):
        self._store = store
        self.draft = KeywordDraft()

    @property
    def items(self) -> List[Keyword]:
        return self._store.state.keywords

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def get(self, entry_id: EntryId) -> Optional[Keyword]:
        for keyword in self.items:
            if keyword.id == entry_id:
                return keyword
        return None

    def add(
        self,
        raw_text: Optional[str] = None,
        category: Optional[str] = None,
        weight: Optional[int] = None
    ) -> Optional[Keyword]:
        """Add a keyword from the arguments, falling back to the input buffer.

        Blank text is ignored and leaves the buffer untouched. On success the
        buffer's text and weight reset; its category is kept for the next add.

        Returns:
            The new keyword, or None if nothing was added
        """
        text = self.draft.text if raw_text is None else raw_text
        category = self.draft.category if category is None else category
        weight = self.draft.weight if weight is None else weight

        normalized = normalize_keyword(text)
        if not normalized:
            return None

        is_valid, message = validate_category(category)
        if not is_valid:
            raise ValidationError(message, field="category")
        is_valid, message = validate_weight(weight)
        if not is_valid:
            raise ValidationError(message, field="weight")

        keyword = Keyword(
            id=PendingId.new(),
            keyword=normalized,
            category=category,
            weight=int(weight),
        )
        self.items.append(keyword)

        self.draft.text = ""
        self.draft.weight = DEFAULT_WEIGHT
        logger.debug("Added keyword '%s' (%s, %dx)", keyword.keyword, category, keyword.weight)
        return keyword

    def remove(self, entry_id: EntryId) -> bool:
        """Remove a keyword. Any number of keywords may be removed."""
        remaining = [k for k in self.items if k.id != entry_id]
        if len(remaining) == len(self.items):
            return False
        self.items[:] = remaining
        return True

    def update_field(self, entry_id: EntryId, field: str, value: Any) -> bool:
        """Replace one field of one keyword."""
        if field not in Keyword.EDITABLE_FIELDS:
            raise ValidationError(
                f"Unknown keyword field '{field}'",
                field=field,
                expected_format=f"one of {', '.join(Keyword.EDITABLE_FIELDS)}"
            )

        if field == "keyword":
            is_valid, message = validate_keyword_text(value)
            if not is_valid:
                raise ValidationError(message, field="keyword")
            value = normalize_keyword(value)
        elif field == "category":
            is_valid, message = validate_category(value)
            if not is_valid:
                raise ValidationError(message, field="category")
        else:
            is_valid, message = validate_weight(value)
            if not is_valid:
                raise ValidationError(message, field="weight")
            value = int(value)

        keyword = self.get(entry_id)
        if keyword is None:
            return False

        setattr(keyword, field, value)
        return True

    def group_by_category(self) -> Dict[str, List[Keyword]]:
        """Group keywords for display, categories in first-seen order."""
        groups: Dict[str, List[Keyword]] = OrderedDict()
        for keyword in self.items:
            groups.setdefault(keyword.category, []).append(keyword)
        return groups
