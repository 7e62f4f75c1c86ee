"""
Message extraction from the literal arguments of a single call.

``match_message`` is the pure core used by every front end: it receives the
already-folded literal arguments of one call and returns the extracted
message, or None when the arguments do not yield a message text.
"""

from typing import Any, Mapping, Optional, Sequence, Union

from .comments import CommentFlattener
from .content import normalize_content
from .matcher import ArgumentRoleMatcher
from .models import ArgumentRole, ExtractedMessage
from .options import ArgumentMapping, CommentOptions, ContentOptions, ExtractorOptions


class MessageMatcher:
    """
    Role matcher and comment flattener bound to one option set.

    Build it once and call ``match()`` per call site. ``match_message()``
    is the one-shot form.
    """

    def __init__(
        self,
        argument_mapping: ArgumentMapping,
        content_options: Optional[ContentOptions] = None,
        comment_options: Optional[CommentOptions] = None,
    ) -> None:
        self._content = content_options or ContentOptions()
        self._roles = ArgumentRoleMatcher(argument_mapping, comment_options)
        self._flattener = CommentFlattener(comment_options)

    @property
    def role_matcher(self) -> ArgumentRoleMatcher:
        return self._roles

    def match(self, call_arguments: Sequence[Any]) -> Optional[ExtractedMessage]:
        """
        Extract a message from the arguments of one call.

        Args:
            call_arguments: LiteralArgument values or plain Python values.

        Returns:
            The message, or None if no text argument was matched.

        Raises:
            MalformedCommentError: From structured comments, when enabled.
        """
        assignment = self._roles.match(call_arguments)

        text_argument = assignment.get(ArgumentRole.TEXT)
        if text_argument is None:
            return None

        message = ExtractedMessage(text=normalize_content(text_argument.text or "", self._content))

        plural_argument = assignment.get(ArgumentRole.TEXT_PLURAL)
        if plural_argument is not None:
            message.text_plural = normalize_content(plural_argument.text or "", self._content)

        context_argument = assignment.get(ArgumentRole.CONTEXT)
        if context_argument is not None:
            message.context = normalize_content(context_argument.text or "", self._content)

        comments_argument = assignment.get(ArgumentRole.COMMENTS)
        if comments_argument is not None:
            message.comments = self._flattener.flatten(
                comments_argument,
                text=message.text,
                context=message.context,
                content_options=self._content,
            )

        return message


def match_message(
    call_arguments: Sequence[Any],
    argument_mapping: Union[ArgumentMapping, Mapping[str, Any]],
    content_options: Union[ContentOptions, Mapping[str, Any], None] = None,
    comment_options: Union[CommentOptions, Mapping[str, Any], None] = None,
) -> Optional[ExtractedMessage]:
    """
    Extract a message from one call's literal arguments.

    Options may be given as models or as raw camelCase mappings. Passing
    ``comment_options`` (even empty) enables structured comments.

    Raises:
        ExtractionConfigError: If the options are invalid.
        MalformedCommentError: From structured comments, when enabled.

    Example:
        >>> match_message(
        ...     ["Foo", {"comment": "No Plural here."}],
        ...     {"text": 0, "textPlural": 1, "comments": 2, "context": 3},
        ...     comment_options={"fallback": True},
        ... ).as_message_data()
        {'text': 'Foo', 'comments': ['No Plural here.']}
    """
    options = ExtractorOptions.from_dict(
        {"arguments": argument_mapping, "comments": comment_options, "content": content_options}
    )
    return MessageMatcher(options.arguments, options.content, options.comments).match(call_arguments)


__all__ = [
    "MessageMatcher",
    "match_message",
]
