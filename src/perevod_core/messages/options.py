"""
Extractor options.

The option surface mirrors the gettext-extractor call expression options:

    {
        "arguments": {"text": 0, "textPlural": 1, "comments": 2, "context": 3},
        "comments": {"commentString": "comment", "props": {"props": ["{", "}"]},
                     "throwWhenMalformed": True, "fallback": False},
        "content": {"trimWhiteSpace": False, "preserveIndentation": True,
                    "replaceNewLines": False},
    }

Models are frozen once built, so one options object can be shared by any
number of extractions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ExtractionConfigError
from .models import ArgumentRole


class SlotType(str, Enum):
    """Matching category of a slot; decides which fallback shifts are legal."""

    TEXT = "text"
    COMMENTS = "comments"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Slot:
    """A role bound to the call argument position it reads."""

    role: ArgumentRole
    position: int

    @property
    def slot_type(self) -> SlotType:
        if self.role is ArgumentRole.TEXT:
            return SlotType.TEXT
        if self.role is ArgumentRole.COMMENTS:
            return SlotType.COMMENTS
        return SlotType.OPTIONAL


class ArgumentMapping(BaseModel):
    """Which positional argument holds which role.

    Only ``text`` is required. Positions must be distinct but need not be
    contiguous or start at zero.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    text: StrictInt = Field(..., ge=0, description="Position of the message text")
    text_plural: Optional[StrictInt] = Field(
        default=None, ge=0, alias="textPlural", description="Position of the plural text"
    )
    context: Optional[StrictInt] = Field(default=None, ge=0, description="Position of the context")
    comments: Optional[StrictInt] = Field(
        default=None, ge=0, description="Position of the comments argument"
    )

    @model_validator(mode="after")
    def check_unique_positions(self) -> "ArgumentMapping":
        seen: Dict[int, ArgumentRole] = {}
        for role, position in self.positions().items():
            if position in seen:
                raise ValueError(
                    f"roles '{seen[position].value}' and '{role.value}' share position {position}"
                )
            seen[position] = role
        return self

    def positions(self) -> Dict[ArgumentRole, int]:
        """Return the configured position of every declared role."""
        declared = {
            ArgumentRole.TEXT: self.text,
            ArgumentRole.TEXT_PLURAL: self.text_plural,
            ArgumentRole.CONTEXT: self.context,
            ArgumentRole.COMMENTS: self.comments,
        }
        return {role: position for role, position in declared.items() if position is not None}

    def slot_sequence(self) -> Tuple[Slot, ...]:
        """Return the declared roles ordered by argument position."""
        slots = [Slot(role=role, position=position) for role, position in self.positions().items()]
        return tuple(sorted(slots, key=lambda slot: slot.position))


class CommentOptions(BaseModel):
    """How a comments argument is recognized and flattened.

    Attributes:
        comment_string: Top-level key holding plain comment lines.
        props: Group key -> (open, close) brackets for grouped lines.
        throw_when_malformed: Raise on values that are neither string nor object.
        fallback: Let omitted optional arguments shift later roles down.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    comment_string: StrictStr = Field(default="comment", alias="commentString")
    props: Dict[str, Tuple[StrictStr, StrictStr]] = Field(default_factory=dict)
    throw_when_malformed: StrictBool = Field(default=True, alias="throwWhenMalformed")
    fallback: StrictBool = Field(default=False)

    @field_validator("props", mode="before")
    @classmethod
    def validate_props(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("comments.props must map property names to bracket pairs")
        for key, value in v.items():
            if not (
                isinstance(value, (list, tuple))
                and len(value) == 2
                and all(isinstance(part, str) for part in value)
            ):
                raise ValueError(
                    f"Entry for comments.props.{key} has to be of type Array and contain two strings."
                )
        return {key: tuple(value) for key, value in v.items()}


class ContentOptions(BaseModel):
    """Normalization applied to extracted text, plural, context and plain comments."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    trim_white_space: StrictBool = Field(default=False, alias="trimWhiteSpace")
    preserve_indentation: StrictBool = Field(default=True, alias="preserveIndentation")
    replace_new_lines: Union[Literal[False], StrictStr] = Field(
        default=False, alias="replaceNewLines"
    )


class ExtractorOptions(BaseModel):
    """Complete option set of one call expression extractor."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    arguments: ArgumentMapping
    comments: Optional[CommentOptions] = None
    content: ContentOptions = Field(default_factory=ContentOptions)

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def from_dict(cls, raw: Union["ExtractorOptions", Mapping[str, Any]]) -> "ExtractorOptions":
        """Validate raw options, reporting every problem at once.

        Raises:
            ExtractionConfigError: If any option is missing or invalid.
        """
        if isinstance(raw, ExtractorOptions):
            return raw
        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            raise ExtractionConfigError(
                message="Invalid extractor options",
                problems=_describe_errors(e),
                original_exception=e,
            ) from e


def _describe_errors(error: PydanticValidationError) -> List[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "options"
        problems.append(f"{location}: {item['msg']}")
    return problems


__all__ = [
    "SlotType",
    "Slot",
    "ArgumentMapping",
    "CommentOptions",
    "ContentOptions",
    "ExtractorOptions",
]
