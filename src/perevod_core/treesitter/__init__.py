"""
Tree-sitter front end for call expression extraction.

Parses JavaScript, TypeScript and TSX with tree-sitter-language-pack and
turns call expressions into CallSite records with literal arguments.

Key components:
- config: Grammar/extension mappings
- exceptions: Tree-sitter specific exceptions
- models: ASTNodeLocation, CallSite
- parser: SourceParser and ParserFactory
- literals: Literal recognition and string folding
- call_sites: CallSiteScanner
"""

from perevod_core.treesitter.call_sites import CallSiteScanner
from perevod_core.treesitter.config import (
    EXTENSION_TO_LANGUAGE,
    LANGUAGE_EXTENSIONS,
    get_language_by_extension,
    is_supported_extension,
    is_supported_language,
)
from perevod_core.treesitter.exceptions import (
    LanguageNotSupportedError,
    ParseError,
    TreeSitterError,
)
from perevod_core.treesitter.literals import fold_string_addition, to_literal
from perevod_core.treesitter.models import ASTNodeLocation, CallSite
from perevod_core.treesitter.parser import ParserFactory, SourceParser

__all__ = [
    # Config
    "LANGUAGE_EXTENSIONS",
    "EXTENSION_TO_LANGUAGE",
    "get_language_by_extension",
    "is_supported_language",
    "is_supported_extension",
    # Exceptions
    "TreeSitterError",
    "LanguageNotSupportedError",
    "ParseError",
    # Models
    "ASTNodeLocation",
    "CallSite",
    # Parsing
    "SourceParser",
    "ParserFactory",
    "CallSiteScanner",
    "to_literal",
    "fold_string_addition",
]
