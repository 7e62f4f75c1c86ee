"""
Comment flattening.

Turns a comments argument into the ordered list of extracted comment lines.
A plain string is split into lines. A structured literal is walked
recursively and every string value is sorted into one of four buckets,
emitted in a fixed order:

    plain    top-level ``comment`` key, verbatim
    other    other top-level keys, as ``key: line``
    grouped  children of a configured group, as ``{key}: line``
    keyed    deeper keys, as ``outer.inner: line``

Example:
    >>> flattener = CommentFlattener(CommentOptions(props={"props": ("{", "}")}))
    >>> flattener.flatten(
    ...     LiteralArgument.from_value(
    ...         {"comment": "C", "props": {"PLACE": "The place"}, "path": "http://x"}
    ...     ),
    ...     text="Foo",
    ... )
    ['C', 'path: http://x', '{PLACE}: The place']
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from .content import normalize_content
from .exceptions import MalformedCommentError
from .models import LiteralArgument
from .options import CommentOptions, ContentOptions

logger = structlog.get_logger(__name__)


@dataclass
class CommentsObject:
    """Comment lines collected during one flattening pass."""

    plain: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)
    grouped: List[str] = field(default_factory=list)
    keyed: List[str] = field(default_factory=list)

    def lines(self) -> List[str]:
        return [*self.plain, *self.other, *self.grouped, *self.keyed]


class CommentFlattener:
    """Flattens plain or structured comments arguments into comment lines."""

    def __init__(self, options: Optional[CommentOptions] = None) -> None:
        self._options = options or CommentOptions()

    @property
    def options(self) -> CommentOptions:
        return self._options

    def flatten(
        self,
        comments: LiteralArgument,
        text: str,
        context: Optional[str] = None,
        content_options: Optional[ContentOptions] = None,
    ) -> List[str]:
        """
        Flatten a comments argument.

        Args:
            comments: Text literal or structured literal.
            text: Message text of the call site, used in error reports.
            context: Message context of the call site, if resolved.
            content_options: Normalization for a plain text comment.
                Structured comment values are never normalized.

        Returns:
            Comment lines in output order.

        Raises:
            MalformedCommentError: If a structured value holds something
                other than a string or object and throw_when_malformed is set.
        """
        if comments.is_text:
            value = comments.text or ""
            if content_options is not None:
                value = normalize_content(value, content_options)
            return value.split("\n")

        if not comments.is_structured:
            return []

        collected = CommentsObject()
        self._collect(comments, None, None, collected, text, context)
        return collected.lines()

    def _collect(
        self,
        structured: LiteralArgument,
        path: Optional[str],
        group: Optional[str],
        collected: CommentsObject,
        text: str,
        context: Optional[str],
    ) -> None:
        options = self._options

        for prop in structured.properties:
            key = prop.key
            value = prop.value
            key_path = f"{path}.{key}" if path is not None else key

            if value.is_text:
                lines = (value.text or "").split("\n")
                if path is None and key == options.comment_string:
                    collected.plain.extend(lines)
                elif group is not None and group != options.comment_string:
                    opening, closing = options.props[group]
                    collected.grouped.extend(f"{opening}{key}{closing}: {line}" for line in lines)
                elif path is not None:
                    collected.keyed.extend(f"{key_path}: {line}" for line in lines)
                else:
                    collected.other.extend(f"{key}: {line}" for line in lines)

            elif value.is_structured:
                if path is None and key in options.props:
                    self._collect(value, key, key, collected, text, context)
                else:
                    self._collect(value, key_path, None, collected, text, context)

            elif options.throw_when_malformed:
                raise MalformedCommentError(key_path=key_path, text=text, context=context)

            else:
                logger.debug(
                    "malformed_comment_skipped",
                    key_path=key_path,
                    kind=value.kind.value,
                    text=text,
                )


__all__ = [
    "CommentsObject",
    "CommentFlattener",
]
