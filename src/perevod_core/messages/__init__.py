"""
Message extraction core.

Maps call arguments onto message roles and flattens structured comments.
Independent of any parser: front ends hand over LiteralArgument values.

Key components:
- options: ArgumentMapping, CommentOptions, ContentOptions, ExtractorOptions
- models: ArgumentKind, LiteralArgument, ExtractedMessage
- matcher: ArgumentRoleMatcher (role assignment with fallback shifting)
- comments: CommentFlattener (structured comment flattening)
- extractor: match_message / MessageMatcher
"""

from .comments import CommentFlattener, CommentsObject
from .content import normalize_content
from .exceptions import ExtractionConfigError, MalformedCommentError
from .extractor import MessageMatcher, match_message
from .matcher import ArgumentRoleMatcher
from .models import (
    ArgumentKind,
    ArgumentRole,
    ExtractedMessage,
    LiteralArgument,
    ObjectProperty,
)
from .options import (
    ArgumentMapping,
    CommentOptions,
    ContentOptions,
    ExtractorOptions,
    Slot,
    SlotType,
)

__all__ = [
    # Options
    "ArgumentMapping",
    "CommentOptions",
    "ContentOptions",
    "ExtractorOptions",
    "Slot",
    "SlotType",
    # Models
    "ArgumentRole",
    "ArgumentKind",
    "LiteralArgument",
    "ObjectProperty",
    "ExtractedMessage",
    # Exceptions
    "ExtractionConfigError",
    "MalformedCommentError",
    # Algorithms
    "ArgumentRoleMatcher",
    "CommentFlattener",
    "CommentsObject",
    "MessageMatcher",
    "match_message",
    "normalize_content",
]
