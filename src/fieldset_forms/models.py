from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class FieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    HIDDEN = "hidden"
    HTML = "html"
    SELECT = "select"
    TEMPLATE_SELECT = "template_select"
    VISIBILITY_SELECT = "visibility_select"
    TAGS = "tags"
    DATETIMEPICKER = "datetimepicker"
    MEDIA_SELECT = "media_select"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "FieldType":
        """Map a raw schema type to a member, unknown types become TEXT."""
        try:
            return cls(value)
        except ValueError:
            return cls.TEXT


def _label(value: Any) -> Any:
    # YAML reads `title: 2024` as an int and `title: false` as "no label"
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _mapping(value: Any) -> Any:
    """Empty YAML blocks load as None; keys may load as ints."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(k): ({} if v is None else v) for k, v in value.items()}
    return value


class FieldProperty(BaseModel):
    type: str = "text"
    options: Dict[str, Any] = Field(default_factory=dict)
    attributes: Dict[str, Any] = Field(default_factory=dict)
    size: Optional[str] = None
    value: Any = ""
    title: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return "text" if value is None else str(value)

    @field_validator("size", "title", mode="before")
    @classmethod
    def _text(cls, value):
        return _label(value)

    @field_validator("options", "attributes", mode="before")
    @classmethod
    def _keys(cls, value):
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        return value

    @property
    def field_type(self) -> FieldType:
        return FieldType.resolve(self.type)


class Section(BaseModel):
    title: str = ""
    fields: Dict[str, FieldProperty] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return _label(value) or ""

    @field_validator("fields", mode="before")
    @classmethod
    def _fields(cls, value):
        return _mapping(value)


class Fieldset(BaseModel):
    title: Optional[str] = None
    sections: Dict[str, Section] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return _label(value)

    @field_validator("sections", mode="before")
    @classmethod
    def _sections(cls, value):
        return _mapping(value)


class CsrfToken(BaseModel):
    name_key: str
    name: str
    value_key: str
    value: str


class TemplateItem(BaseModel):
    type: str  # "file" or "dir"
    path: str
    basename: str  # filename with extension
    filename: str  # filename without extension
    extension: str = ""


class RequestContext(BaseModel):
    query_params: Dict[str, str] = Field(default_factory=dict)
