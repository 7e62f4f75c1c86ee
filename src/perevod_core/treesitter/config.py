"""
Tree-sitter configuration module.

Maps the grammars call expressions are extracted from to their file
extensions.
"""

from typing import Dict, Optional, Tuple


# =============================================================================
# LANGUAGE EXTENSIONS MAPPING
# =============================================================================
# Keys are grammar names as used by tree-sitter-language-pack.
# .jsx goes through the javascript grammar, which parses JSX natively;
# .tsx needs the dedicated tsx grammar.

LANGUAGE_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    "javascript": (".js", ".jsx", ".mjs", ".cjs"),
    "typescript": (".ts", ".mts", ".cts"),
    "tsx": (".tsx",),
}


# =============================================================================
# EXTENSION TO LANGUAGE MAPPING (Reverse Lookup)
# =============================================================================

EXTENSION_TO_LANGUAGE: Dict[str, str] = {
    ext: lang
    for lang, extensions in LANGUAGE_EXTENSIONS.items()
    for ext in extensions
}


def get_language_by_extension(extension: str) -> Optional[str]:
    """
    Get the grammar name for a given file extension.

    Args:
        extension: File extension (with or without leading dot).

    Returns:
        Language name if found, None otherwise.

    Examples:
        >>> get_language_by_extension(".js")
        'javascript'
        >>> get_language_by_extension("tsx")
        'tsx'
        >>> get_language_by_extension(".py") is None
        True
    """
    if not extension.startswith("."):
        extension = f".{extension}"

    return EXTENSION_TO_LANGUAGE.get(extension.lower())


def is_supported_language(language: str) -> bool:
    """Check if call expressions can be extracted for a grammar name."""
    return language in LANGUAGE_EXTENSIONS


def is_supported_extension(extension: str) -> bool:
    """Check if a file extension maps to a supported grammar."""
    return get_language_by_extension(extension) is not None
