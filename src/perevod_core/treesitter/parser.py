"""
Source parsing with tree-sitter.

Provides SourceParser for the grammars in LANGUAGE_EXTENSIONS and
ParserFactory, which caches one parser per grammar.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from pathlib import Path
from typing import Dict, Optional, Tuple

import structlog
from tree_sitter import Parser, Tree
from tree_sitter_language_pack import get_parser

from perevod_core.config import settings

from .config import LANGUAGE_EXTENSIONS, get_language_by_extension
from .exceptions import LanguageNotSupportedError, ParseError

logger = structlog.get_logger(__name__)


class SourceParser:
    """
    Parser for one grammar from tree-sitter-language-pack.

    Example:
        >>> parser = SourceParser("javascript")
        >>> tree = parser.parse(b"_('Hello');")
        >>> tree.root_node.type
        'program'
    """

    def __init__(self, language_name: str):
        """
        Args:
            language_name: Grammar name, one of LANGUAGE_EXTENSIONS.

        Raises:
            LanguageNotSupportedError: If the grammar is not configured.
        """
        if language_name not in LANGUAGE_EXTENSIONS:
            raise LanguageNotSupportedError(
                language=language_name,
                details={"supported": sorted(LANGUAGE_EXTENSIONS)},
            )

        self._language_name = language_name
        self._parser: Optional[Parser] = None
        self._log = logger.bind(parser=self.__class__.__name__, language=language_name)

    @property
    def language_name(self) -> str:
        return self._language_name

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return LANGUAGE_EXTENSIONS[self._language_name]

    def get_parser(self) -> Parser:
        """
        Get the tree-sitter Parser, creating it on first use.

        Raises:
            LanguageNotSupportedError: If the grammar is missing from
                tree-sitter-language-pack.
        """
        if self._parser is None:
            try:
                self._parser = get_parser(self._language_name)
            except Exception as e:
                self._log.error("grammar_unavailable", error=str(e))
                raise LanguageNotSupportedError(
                    language=self._language_name,
                    details={"error": str(e)},
                    original_exception=e,
                ) from e
            self._log.debug("parser_initialized")
        return self._parser

    def parse(self, source_code: bytes) -> Optional[Tree]:
        """
        Parse source code into an AST tree.

        Args:
            source_code: Source code as bytes.

        Returns:
            Parsed AST Tree if successful, None if parsing fails. Trees with
            syntax errors are still returned; tree-sitter recovers locally.
        """
        parser = self.get_parser()
        try:
            tree = parser.parse(source_code)
        except Exception as e:
            self._log.error("parse_failed", source_length=len(source_code), error=str(e))
            return None

        self._log.debug(
            "parse_success",
            source_length=len(source_code),
            has_errors=tree.root_node.has_error,
        )
        return tree

    def parse_file(self, file_path: str) -> Tuple[Optional[Tree], bytes]:
        """
        Read and parse a source file.

        Returns:
            The tree (None if parsing failed) and the raw source bytes.

        Raises:
            ParseError: If the file is missing, unreadable or too large.
        """
        source_code = read_source(file_path)
        return self.parse(source_code), source_code

    def supports_extension(self, extension: str) -> bool:
        if not extension.startswith("."):
            extension = f".{extension}"
        return extension in self.file_extensions

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(language='{self.language_name}')"


def read_source(file_path: str) -> bytes:
    """
    Read a source file, enforcing settings.max_file_size_bytes.

    Raises:
        ParseError: If the file is missing, not a file, unreadable or too large.
    """
    path = Path(file_path)

    if not path.exists():
        logger.error("file_not_found", file_path=file_path)
        raise ParseError(file_path=file_path, parse_details="File not found")

    if not path.is_file():
        logger.error("not_a_file", file_path=file_path)
        raise ParseError(file_path=file_path, parse_details="Path is not a file")

    try:
        size = path.stat().st_size
        if size > settings.max_file_size_bytes:
            logger.warning(
                "file_too_large",
                file_path=file_path,
                size_bytes=size,
                limit=settings.max_file_size_bytes,
            )
            raise ParseError(
                file_path=file_path,
                parse_details=f"File exceeds {settings.max_file_size_bytes} bytes",
            )
        source_code = path.read_bytes()
    except PermissionError as e:
        logger.error("permission_denied", file_path=file_path, error=str(e))
        raise ParseError(file_path=file_path, parse_details="Permission denied") from e
    except OSError as e:
        logger.error("read_error", file_path=file_path, error=str(e))
        raise ParseError(file_path=file_path, parse_details=f"Failed to read file: {e}") from e

    logger.debug("file_read", file_path=file_path, size_bytes=len(source_code))
    return source_code


class ParserFactory:
    """
    Cache of SourceParser instances, one per grammar.

    Example:
        >>> parser = ParserFactory.get_parser_for_file("src/app.tsx")
        >>> parser.language_name
        'tsx'
    """

    _parsers: Dict[str, SourceParser] = {}

    @classmethod
    def get_parser(cls, language: str) -> SourceParser:
        """
        Get the parser for a grammar, creating it on first request.

        Raises:
            LanguageNotSupportedError: If the grammar is not configured.
        """
        parser = cls._parsers.get(language)
        if parser is None:
            parser = SourceParser(language)
            cls._parsers[language] = parser
            logger.debug("parser_registered", language=language)
        return parser

    @classmethod
    def get_parser_for_file(cls, file_path: str) -> Optional[SourceParser]:
        """
        Get a parser based on the file extension.

        Returns:
            SourceParser if the extension is supported, None otherwise.
        """
        extension = Path(file_path).suffix
        language = get_language_by_extension(extension) if extension else None

        if language is None:
            logger.debug("no_parser_for_extension", file_path=file_path, extension=extension)
            return None

        return cls.get_parser(language)

    @classmethod
    def reset(cls) -> None:
        """Drop all cached parsers (for tests)."""
        cls._parsers = {}


__all__ = [
    "SourceParser",
    "ParserFactory",
    "read_source",
]
