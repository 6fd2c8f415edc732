"""
Backend Wire Schemas

Request and response shapes of the interview admin API, and their mapping
onto the editor's in-memory records.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from template_editor.editor.models import (
    DEFAULT_CATEGORY,
    DEFAULT_TIME_LIMIT,
    DEFAULT_WEIGHT,
    Keyword,
    PendingId,
    Question,
    TemplateState,
    as_entry_id,
    normalize_keyword,
)
from template_editor.editor.logging_config import get_logger

logger = get_logger("schemas")


class QuestionRecord(BaseModel):
    """A question as returned by GET /templates/{id}."""

    id: Union[str, int]
    question_text: str = ""
    time_limit: int = DEFAULT_TIME_LIMIT
    question_order: int = 0

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("question_text", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return value or ""

    @field_validator("time_limit", mode="before")
    @classmethod
    def _default_time_limit(cls, value: Any) -> Any:
        return DEFAULT_TIME_LIMIT if value is None else value

    @field_validator("question_order", mode="before")
    @classmethod
    def _default_order(cls, value: Any) -> Any:
        return 0 if value is None else value

    def to_question(self) -> Question:
        return Question(
            id=as_entry_id(self.id),
            text=self.question_text,
            time_limit=self.time_limit,
            order=self.question_order,
        )


class TemplateRecord(BaseModel):
    """A template as returned by GET /templates/{id}."""

    id: Optional[Union[str, int]] = None
    title: str = ""
    description: str = ""
    questions: List[QuestionRecord] = Field(default_factory=list)

    class Config:
        extra = "ignore"

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return value or ""

    @field_validator("questions", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return value or []


class KeywordRecord(BaseModel):
    """A keyword as returned by GET /templates/{id}/keywords."""

    id: Optional[Union[str, int]] = None
    keyword: Optional[str] = ""
    category: str = DEFAULT_CATEGORY
    weight: float = DEFAULT_WEIGHT

    class Config:
        extra = "ignore"

    @field_validator("keyword", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        # null rows are dropped by keywords_from_wire, not rejected
        return "" if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> str:
        return value or DEFAULT_CATEGORY

    @field_validator("weight", mode="before")
    @classmethod
    def _default_weight(cls, value: Any) -> Any:
        return DEFAULT_WEIGHT if value is None else value

    def to_keyword(self) -> Keyword:
        weight = int(self.weight) if float(self.weight).is_integer() else self.weight
        return Keyword(
            id=as_entry_id(self.id) if self.id is not None else PendingId.new(),
            keyword=normalize_keyword(self.keyword),
            category=self.category,
            weight=weight,
        )


class KeywordListResponse(BaseModel):
    """Body of GET /templates/{id}/keywords."""

    keywords: List[Any] = Field(default_factory=list)
    total: Optional[int] = None

    class Config:
        extra = "ignore"

    @field_validator("keywords", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return value or []


class QuestionPayload(BaseModel):
    """One question in the PUT /templates/{id} body. No id means "create"."""

    id: Optional[str] = None
    text: str
    time_limit: int = Field(alias="timeLimit")
    question_order: int

    class Config:
        populate_by_name = True


class TemplateUpdatePayload(BaseModel):
    """Body of PUT /templates/{id}."""

    title: str
    description: str
    questions: List[QuestionPayload]

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class KeywordPayload(BaseModel):
    """One keyword in the POST /templates/{id}/keywords body. Ids are never sent."""

    keyword: str
    category: str
    weight: float

    def to_wire(self) -> dict:
        data = self.model_dump()
        if float(data["weight"]).is_integer():
            data["weight"] = int(data["weight"])
        return data


class KeywordReplacePayload(BaseModel):
    """Body of POST /templates/{id}/keywords; replaces the whole keyword set."""

    keywords: List[KeywordPayload]

    def to_wire(self) -> dict:
        return {"keywords": [k.to_wire() for k in self.keywords]}


def template_from_wire(template_id: str, data: dict) -> TemplateState:
    """Map a template response onto editor state, questions in display order."""
    record = TemplateRecord.model_validate(data)
    questions = [q.to_question() for q in sorted(record.questions, key=lambda q: q.question_order)]
    for position, question in enumerate(questions, 1):
        question.order = position
    return TemplateState(
        id=template_id,
        title=record.title,
        description=record.description,
        questions=questions,
    )


def keywords_from_wire(data: dict) -> List[Keyword]:
    """Map a keyword list response onto editor keywords.

    Rows that are blank or malformed are skipped one by one; the rest load.
    """
    response = KeywordListResponse.model_validate(data)
    keywords = []
    for row in response.keywords:
        try:
            keyword = KeywordRecord.model_validate(row).to_keyword()
        except PydanticValidationError as e:
            logger.debug("Skipping unreadable keyword row %r: %s", row, e)
            continue
        if keyword.keyword:
            keywords.append(keyword)
    return keywords
