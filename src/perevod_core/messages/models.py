"""Pydantic models for call-argument literals and extracted messages."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ArgumentRole(str, Enum):
    """Semantic role a call argument can occupy."""

    TEXT = "text"
    TEXT_PLURAL = "textPlural"
    CONTEXT = "context"
    COMMENTS = "comments"


class ArgumentKind(str, Enum):
    """Shape of a literal call argument, as seen by the role matcher.

    OMITTED marks a deliberate placeholder (``null``, ``undefined`` or
    numeric zero) that leaves an optional role unassigned.
    """

    TEXT_LITERAL = "text-literal"
    STRUCTURED = "structured"
    OMITTED = "omitted-marker"
    OTHER = "other"


class LiteralArgument(BaseModel):
    """A call argument reduced to its literal shape.

    Text literals carry their cooked ``text``; structured (object-shaped)
    literals carry their ``properties`` in source order. Anything the
    extractor does not evaluate is kept as OTHER with its raw ``source``.
    """

    model_config = ConfigDict(frozen=True)

    kind: ArgumentKind = Field(..., description="Literal shape of the argument")
    text: Optional[str] = Field(default=None, description="Cooked string value")
    properties: List["ObjectProperty"] = Field(
        default_factory=list,
        description="Key/value pairs of a structured literal, in source order",
    )
    source: Optional[str] = Field(default=None, description="Raw source text if known")

    @classmethod
    def text_literal(cls, text: str, source: Optional[str] = None) -> "LiteralArgument":
        return cls(kind=ArgumentKind.TEXT_LITERAL, text=text, source=source)

    @classmethod
    def structured(
        cls, properties: List["ObjectProperty"], source: Optional[str] = None
    ) -> "LiteralArgument":
        return cls(kind=ArgumentKind.STRUCTURED, properties=properties, source=source)

    @classmethod
    def omitted(cls, source: Optional[str] = None) -> "LiteralArgument":
        return cls(kind=ArgumentKind.OMITTED, source=source)

    @classmethod
    def other(cls, source: Optional[str] = None) -> "LiteralArgument":
        return cls(kind=ArgumentKind.OTHER, source=source)

    @classmethod
    def from_value(cls, value: Any) -> "LiteralArgument":
        """Build a literal from a plain Python value.

        ``str`` becomes a text literal, ``dict`` a structured literal (values
        converted recursively), ``None`` and numeric zero an omitted marker.
        Everything else, booleans included, is OTHER.

        Example:
            >>> LiteralArgument.from_value({"comment": "Shown on the login page"}).kind
            <ArgumentKind.STRUCTURED: 'structured'>
        """
        if isinstance(value, LiteralArgument):
            return value
        if isinstance(value, str):
            return cls.text_literal(value)
        if isinstance(value, dict):
            return cls.structured(
                [ObjectProperty(key=str(key), value=cls.from_value(item)) for key, item in value.items()]
            )
        if value is None:
            return cls.omitted()
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
            return cls.omitted(source=repr(value))
        return cls.other(source=repr(value))

    @property
    def is_text(self) -> bool:
        return self.kind is ArgumentKind.TEXT_LITERAL

    @property
    def is_structured(self) -> bool:
        return self.kind is ArgumentKind.STRUCTURED

    @property
    def is_omitted(self) -> bool:
        return self.kind is ArgumentKind.OMITTED


class ObjectProperty(BaseModel):
    """One ``key: value`` member of a structured literal."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Property name")
    value: LiteralArgument = Field(..., description="Property value")


LiteralArgument.model_rebuild()


class ExtractedMessage(BaseModel):
    """A translatable message recovered from one call site.

    Field aliases follow the gettext message data shape (``textPlural``),
    so ``as_message_data()`` can be fed to catalog writers directly.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    text: str = Field(..., description="Message id")
    text_plural: Optional[str] = Field(
        default=None, alias="textPlural", description="Plural message id"
    )
    context: Optional[str] = Field(default=None, description="Message context (msgctxt)")
    comments: Optional[List[str]] = Field(
        default=None, description="Extracted comment lines, in output order"
    )
    references: List[str] = Field(
        default_factory=list, description="Source references as 'path:line'"
    )

    def as_message_data(self) -> Dict[str, Any]:
        """Return the message as a camelCase dict without unset fields."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not self.references:
            data.pop("references", None)
        return data


__all__ = [
    "ArgumentRole",
    "ArgumentKind",
    "LiteralArgument",
    "ObjectProperty",
    "ExtractedMessage",
]
