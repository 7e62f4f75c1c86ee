"""Whitespace and newline normalization of extracted strings."""

import re

from .options import ContentOptions

_LEADING_NEWLINES_OR_TRAILING_SPACE = re.compile(r"\A\n+|\s+\Z")
_LINE_INDENTATION = re.compile(r"^[ \t]+", re.MULTILINE)


def normalize_content(content: str, options: ContentOptions) -> str:
    """
    Normalize a cooked string literal according to the content options.

    Steps run in a fixed order: trimming (leading newlines and trailing
    whitespace only, so a deliberately indented first line survives),
    indentation removal on every line, then newline replacement.

    Args:
        content: Cooked literal text.
        options: Content options of the extractor.

    Returns:
        The normalized text.

    Examples:
        >>> normalize_content("\\n  Hello\\n  World  ", ContentOptions(trimWhiteSpace=True))
        '  Hello\\n  World'
        >>> normalize_content("  a\\n\\tb", ContentOptions(preserveIndentation=False))
        'a\\nb'
    """
    if options.trim_white_space:
        content = _LEADING_NEWLINES_OR_TRAILING_SPACE.sub("", content)

    if not options.preserve_indentation:
        content = _LINE_INDENTATION.sub("", content)

    if options.replace_new_lines is not False:
        content = content.replace("\n", options.replace_new_lines)

    return content


__all__ = ["normalize_content"]
