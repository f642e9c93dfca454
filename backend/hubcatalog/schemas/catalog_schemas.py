"""
Request and response schemas for the catalog API.

Text fields accept JSON strings and plain numbers (a version sent as 1.2 is
stored as "1.2"); booleans and nulls are rejected. Surrounding whitespace is
trimmed and blank values are rejected, so a stored value is never empty.
"""

import math
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_text(v: Any) -> Any:
    """Render numbers as text; leave everything else for type validation"""
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return str(v)
    return v


def require_non_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class PluginCreate(BaseModel):
    """Body of POST /api/plugins"""

    name: str = Field(..., description="Plugin name")
    author: str = Field(..., description="Plugin author")
    version: str = Field(..., description="Version label")
    rating: float = Field(..., description="Numeric rating")
    tname: str = Field(..., description="Tag to attach, created on first use")

    @field_validator("name", "author", "version", "tname", mode="before")
    @classmethod
    def text_from_number(cls, v: Any) -> Any:
        return coerce_text(v)

    @field_validator("name", "author", "version", "tname")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return require_non_blank(v)

    @field_validator("rating", mode="before")
    @classmethod
    def rating_not_boolean(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("rating must be a number")
        return v

    @field_validator("rating")
    @classmethod
    def rating_well_formed(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("rating must be a finite number")
        if v == 0:
            raise ValueError("rating is required")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Dark Mode",
                "author": "ada",
                "version": "1.2.0",
                "rating": 4.5,
                "tname": "appearance",
            }
        }
    )


class IssueCreate(BaseModel):
    """Body of POST /api/issues"""

    title: str
    severity: str
    status: str

    @field_validator("title", "severity", "status", mode="before")
    @classmethod
    def text_from_number(cls, v: Any) -> Any:
        return coerce_text(v)

    @field_validator("title", "severity", "status")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return require_non_blank(v)


class FaqCreate(BaseModel):
    """Body of POST /api/faqs"""

    question: str
    answer: str

    @field_validator("question", "answer", mode="before")
    @classmethod
    def text_from_number(cls, v: Any) -> Any:
        return coerce_text(v)

    @field_validator("question", "answer")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return require_non_blank(v)


class PluginCreated(BaseModel):
    message: str = "Plugin successfully added"
    pluginId: int


class IssueCreated(BaseModel):
    message: str = "Issue successfully added"
    issueId: int


class FaqCreated(BaseModel):
    message: str = "FAQ successfully added"
    faqId: int


def describe_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic error entries into {field, message, type} dicts"""
    details = []
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part != "body"]
        details.append(
            {
                "field": str(loc[-1]) if loc else None,
                "message": error.get("msg", "Validation error"),
                "type": error.get("type"),
            }
        )
    return details


def parse_payload(model: Type[ModelT], data: Dict[str, Any], message: str) -> ModelT:
    """
    Validate data against model, raising the catalog ValidationError.

    Raises:
        ValidationError: With message, and the first offending field.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = describe_errors(e.errors())
        raise ValidationError(message, field=details[0]["field"] if details else None) from e
