"""
Call expression extraction for JavaScript and TypeScript sources.

CallExpressionExtractor binds callee names to an option set. JsExtractor
parses sources, hands every call site to its extractors and collects the
resulting messages, merging duplicates.

Example:
    ```python
    from perevod_core.extractor import CallExpressionExtractor, JsExtractor

    extractor = JsExtractor([
        CallExpressionExtractor("_", {
            "arguments": {"text": 0, "textPlural": 1, "comments": 2, "context": 3},
            "comments": {"props": {"props": ["{", "}"]}, "fallback": True},
        }),
    ])
    extractor.parse_file("src/app.js")
    for message in extractor.get_messages():
        print(message.as_message_data())
    ```

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import time
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from perevod_core.config import settings
from perevod_core.logging_service import LoggingService
from perevod_core.messages import (
    ExtractedMessage,
    ExtractionConfigError,
    ExtractorOptions,
    MalformedCommentError,
    MessageMatcher,
)
from perevod_core.treesitter import CallSite, CallSiteScanner, ParseError, ParserFactory
from perevod_core.treesitter.parser import read_source
from perevod_core.utils import get_logger

logger = get_logger(__name__)

MessageKey = Tuple[str, str]


class CallExpressionExtractor:
    """
    Extracts messages from calls to the configured callee names.

    Args:
        callee_name: Dotted callee name or list of names, e.g. "_" or
            ["i18n.t", "this.t"].
        options: ExtractorOptions or the raw camelCase option mapping.

    Raises:
        ExtractionConfigError: If callee names or options are invalid.
    """

    def __init__(
        self,
        callee_name: Union[str, Sequence[str]],
        options: Union[ExtractorOptions, Mapping[str, Any]],
    ) -> None:
        self._callee_names = self._validate_callee_names(callee_name)
        self._options = ExtractorOptions.from_dict(options)
        self._matcher = MessageMatcher(
            self._options.arguments,
            self._options.content,
            self._options.comments,
        )
        logger.debug(
            "call_expression_extractor_created",
            callee_names=list(self._callee_names),
            roles=[slot.role.value for slot in self._matcher.role_matcher.slots],
            fallback=self._matcher.role_matcher.fallback,
        )

    @property
    def callee_names(self) -> Tuple[str, ...]:
        return self._callee_names

    @property
    def options(self) -> ExtractorOptions:
        return self._options

    def matches(self, call_site: CallSite) -> bool:
        return call_site.callee_name is not None and call_site.callee_name in self._callee_names

    def extract(self, call_site: CallSite) -> Optional[ExtractedMessage]:
        """
        Extract the message of a call site, if its callee is configured.

        Returns:
            The message, or None if the callee does not match or the
            arguments yield no message text.

        Raises:
            MalformedCommentError: From structured comments, when enabled.
        """
        if not self.matches(call_site):
            return None

        message = self._matcher.match(call_site.arguments)
        if message is None:
            logger.debug(
                "call_without_message",
                callee=call_site.callee_name,
                reference=call_site.reference,
                line=call_site.line,
            )
            return None

        if call_site.reference is not None:
            message.references = [call_site.reference]
        return message

    @staticmethod
    def _validate_callee_names(callee_name: Union[str, Sequence[str]]) -> Tuple[str, ...]:
        if isinstance(callee_name, str):
            names: List[Any] = [callee_name]
        elif isinstance(callee_name, (list, tuple)):
            names = list(callee_name)
        else:
            names = []
        if not names or any(not isinstance(name, str) or not name for name in names):
            raise ExtractionConfigError(
                message="Argument 'calleeName' must be a non-empty string "
                "or an array containing non-empty strings",
                details={"callee_name": repr(callee_name)},
            )
        return tuple(names)


class JsExtractor:
    """
    Runs call expression extractors over JavaScript/TypeScript sources.

    Messages with the same context and text are merged: references and
    comment lines not seen yet are appended, and the first plural wins.
    A missing context and an empty one are the same context.

    A malformed structured comment drops only the call site it belongs to.
    The error is logged and kept in ``errors``; extraction carries on with
    the next call site.
    """

    def __init__(self, extractors: Optional[Iterable[CallExpressionExtractor]] = None) -> None:
        self._extractors: List[CallExpressionExtractor] = list(extractors or [])
        self._scanner = CallSiteScanner()
        self._messages: Dict[MessageKey, ExtractedMessage] = {}
        self._errors: List[MalformedCommentError] = []

    def add_extractor(self, extractor: CallExpressionExtractor) -> "JsExtractor":
        self._extractors.append(extractor)
        return self

    def parse_source(
        self,
        source: Union[str, bytes],
        file_path: Optional[str] = None,
        language: Optional[str] = None,
    ) -> List[ExtractedMessage]:
        """
        Extract messages from source text.

        Args:
            source: Source code; str is encoded as UTF-8.
            file_path: Used for references and, without ``language``,
                to pick the grammar.
            language: Grammar name ("javascript", "typescript", "tsx").
                Defaults to the file extension's grammar, else javascript.

        Returns:
            Messages found in this source, in source order (unmerged).

        Raises:
            ParseError: If the source cannot be parsed.
        """
        source_bytes = source.encode("utf-8") if isinstance(source, str) else source
        parser = self._select_parser(file_path, language)

        tree = parser.parse(source_bytes)
        if tree is None:
            raise ParseError(file_path=file_path or "<source>", parse_details="tree-sitter failed")

        found: List[ExtractedMessage] = []
        for call_site in self._scanner.scan(tree, source_bytes, file_path):
            for extractor in self._extractors:
                try:
                    message = extractor.extract(call_site)
                except MalformedCommentError as e:
                    self._record_error(e, call_site)
                    continue
                if message is not None:
                    found.append(message)
                    self._add_message(message)
        return found

    def parse_file(self, file_path: str, language: Optional[str] = None) -> List[ExtractedMessage]:
        """
        Extract messages from a source file.

        Raises:
            ParseError: If the file cannot be read, decoded or parsed.
        """
        correlation_id = str(uuid.uuid4())
        start = time.perf_counter()

        raw = read_source(file_path)
        try:
            source = raw.decode(settings.source_encoding)
        except UnicodeDecodeError as e:
            raise ParseError(
                file_path=file_path,
                parse_details=f"Cannot decode as {settings.source_encoding}",
                original_exception=e,
            ) from e

        found = self.parse_source(source, file_path=file_path, language=language)

        LoggingService.log_performance(
            operation="extract_file",
            duration_ms=(time.perf_counter() - start) * 1000,
            correlation_id=correlation_id,
            metadata={"file_path": file_path, "messages": len(found)},
        )
        return found

    def parse_files(self, file_paths: Iterable[str]) -> List[ExtractedMessage]:
        """Extract from several files; returns the merged messages."""
        for file_path in file_paths:
            self.parse_file(file_path)
        return self.get_messages()

    def get_messages(self) -> List[ExtractedMessage]:
        """Merged messages in first-seen order."""
        return list(self._messages.values())

    @property
    def errors(self) -> List[MalformedCommentError]:
        """Malformed comment errors of the call sites that were dropped."""
        return list(self._errors)

    def clear(self) -> None:
        self._messages = {}
        self._errors = []

    def _select_parser(self, file_path: Optional[str], language: Optional[str]):
        if language is not None:
            return ParserFactory.get_parser(language)
        if file_path is not None:
            parser = ParserFactory.get_parser_for_file(file_path)
            if parser is not None:
                return parser
        return ParserFactory.get_parser("javascript")

    def _record_error(self, error: MalformedCommentError, call_site: CallSite) -> None:
        self._errors.append(error)
        LoggingService.log_error(
            error=error,
            correlation_id=error.correlation_id,
            context={"callee": call_site.callee_name, "reference": call_site.reference},
            include_stack_trace=False,
        )

    def _add_message(self, message: ExtractedMessage) -> None:
        key: MessageKey = (message.context or "", message.text)
        existing = self._messages.get(key)
        if existing is None:
            self._messages[key] = message.model_copy(deep=True)
            return

        if existing.text_plural is None and message.text_plural is not None:
            existing.text_plural = message.text_plural
        elif message.text_plural is not None and message.text_plural != existing.text_plural:
            logger.warning(
                "conflicting_plural",
                text=message.text,
                kept=existing.text_plural,
                ignored=message.text_plural,
            )

        if message.comments:
            merged = list(existing.comments or [])
            merged.extend(line for line in message.comments if line not in merged)
            existing.comments = merged

        for reference in message.references:
            if reference not in existing.references:
                existing.references.append(reference)


__all__ = [
    "CallExpressionExtractor",
    "JsExtractor",
]
