"""
Exceptions raised by message extraction.

Only two conditions are errors: invalid extractor configuration (raised
once, when an extractor is built) and a malformed structured comment
(raised per call site, when ``throwWhenMalformed`` is enabled). A call
whose arguments do not fit the role mapping is not an error.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

from perevod_core.exceptions import ProcessingError, ValidationError


class ExtractionConfigError(ValidationError):
    """
    Raised when extractor options or callee names are invalid.

    Error Code: CFG_001

    Attributes:
        problems: One line per offending option, e.g.
            "arguments.text: Field required"

    Example:
        raise ExtractionConfigError(
            message="Invalid extractor options",
            problems=["arguments.text: Field required"],
        )
    """

    default_code = "CFG_001"

    def __init__(
        self,
        message: str = "Invalid extractor configuration",
        problems: Optional[List[str]] = None,
        **kwargs,
    ):
        self.problems = list(problems or [])
        if self.problems:
            message = f"{message}: {'; '.join(self.problems)}"

        details = kwargs.pop("details", {})
        if self.problems:
            details["problems"] = self.problems

        super().__init__(message=message, details=details, **kwargs)


class MalformedCommentError(ProcessingError):
    """
    Raised when a structured comment holds a value that is neither a
    string nor a nested object.

    Error Code: MSG_001

    Attributes:
        key_path: Dotted path of the offending property (e.g. "props.count")
        text: Message text of the call site being extracted
        context: Message context, if it was resolved

    Example:
        raise MalformedCommentError(key_path="props.count", text="{count} files")
    """

    default_code = "MSG_001"

    def __init__(
        self,
        key_path: str,
        text: str,
        context: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs,
    ):
        self.key_path = key_path
        self.text = text
        self.context = context

        if message is None:
            where = f"'{text}'" if context is None else f"'{text}' with id '{context}'"
            message = f"Key {key_path} at {where} has invalid value. Allowed are string or object."

        details = kwargs.pop("details", {})
        details["key_path"] = key_path
        details["text"] = text
        if context is not None:
            details["context"] = context

        super().__init__(message=message, details=details, **kwargs)


__all__ = [
    "ExtractionConfigError",
    "MalformedCommentError",
]
