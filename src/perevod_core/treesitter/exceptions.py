"""
Errors of the tree-sitter front end: unknown grammars and unreadable or
unparsable sources.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

from perevod_core.exceptions import ProcessingError


class TreeSitterError(ProcessingError):
    """Base for front end errors (TS_001)."""

    default_code = "TS_001"
    default_message = "Tree-sitter operation failed"


class LanguageNotSupportedError(TreeSitterError):
    """No grammar named ``language`` is configured or installed (TS_002)."""

    default_code = "TS_002"

    def __init__(self, language: str, message: Optional[str] = None, **kwargs):
        self.language = language
        kwargs["details"] = {**kwargs.get("details", {}), "language": language}
        super().__init__(
            message or f"Language '{language}' is not supported for call expression extraction",
            **kwargs,
        )


class ParseError(TreeSitterError):
    """
    A source could not be read, decoded or parsed (TS_003).

    ``parse_details`` says which step failed, e.g. "File not found".
    """

    default_code = "TS_003"

    def __init__(
        self,
        file_path: str,
        parse_details: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs,
    ):
        self.file_path = file_path
        self.parse_details = parse_details

        details = {**kwargs.get("details", {}), "file_path": file_path}
        if parse_details:
            details["parse_details"] = parse_details
        kwargs["details"] = details

        if message is None:
            message = f"Failed to parse file '{file_path}'"
            if parse_details:
                message += f": {parse_details}"
        super().__init__(message, **kwargs)


__all__ = [
    "TreeSitterError",
    "LanguageNotSupportedError",
    "ParseError",
]
