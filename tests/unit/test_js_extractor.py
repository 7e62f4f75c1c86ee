"""
Unit tests for CallExpressionExtractor and JsExtractor.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pytest

import perevod_core.extractor as extractor_module
from perevod_core.config import settings
from perevod_core.extractor import CallExpressionExtractor, JsExtractor
from perevod_core.messages import ExtractionConfigError, MalformedCommentError
from perevod_core.treesitter import LanguageNotSupportedError, ParseError

FULL_ARGUMENTS = {"text": 0, "textPlural": 1, "comments": 2, "context": 3}

APP_SOURCE = """import i18n from './i18n';

const title = _('Foo', 'Foos', {comment: 'Title of the page', props: {COUNT: 'number of items'}}, 'menu');
const other = _('Bar', null, null, 'menu');
function render() {
    return i18n.t('Baz');
}
_(variable);
_('Foo', 'Foos', {comment: 'Used twice'}, 'menu');
"""


class RecordingLogger:
    """Stand-in for the module logger that keeps every call."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, level):
        def record(event, **kwargs):
            self.calls.append((level, event, kwargs))

        return record

    def events(self, level):
        return [(event, kwargs) for lvl, event, kwargs in self.calls if lvl == level]


@pytest.fixture
def extractor():
    """JsExtractor for ``_`` and ``i18n.t`` with structured comments."""
    return JsExtractor(
        [
            CallExpressionExtractor(
                ["_", "i18n.t"],
                {"arguments": FULL_ARGUMENTS, "comments": {"props": {"props": ["{", "}"]}}},
            )
        ]
    )


@pytest.fixture
def app_file(tmp_path):
    path = tmp_path / "app.js"
    path.write_text(APP_SOURCE, encoding="utf-8")
    return str(path)


class TestCallExpressionExtractor:
    """Tests for CallExpressionExtractor configuration."""

    @pytest.mark.parametrize("callee_name", ["", [], ["_", ""], 5, None, ["_", 3]])
    def test_invalid_callee_names(self, callee_name):
        """Test callee names must be non-empty strings."""
        with pytest.raises(ExtractionConfigError, match="calleeName"):
            CallExpressionExtractor(callee_name, {"arguments": {"text": 0}})

    def test_callee_names_normalized(self):
        """Test a single name and a list both become a tuple."""
        assert CallExpressionExtractor("_", {"arguments": {"text": 0}}).callee_names == ("_",)
        assert CallExpressionExtractor(
            ["_", "this.t"], {"arguments": {"text": 0}}
        ).callee_names == ("_", "this.t")

    def test_invalid_options(self):
        """Test options are validated when the extractor is built."""
        with pytest.raises(ExtractionConfigError, match="arguments.text"):
            CallExpressionExtractor("_", {"arguments": {"context": 1}})

    def test_other_callees_ignored(self):
        """Test calls to other functions yield nothing."""
        js = JsExtractor([CallExpressionExtractor("_", {"arguments": {"text": 0}})])
        assert js.parse_source("gettext('Foo'); obj._('Bar');") == []


class TestJsExtractor:
    """Tests for JsExtractor."""

    def test_parse_file(self, extractor, app_file):
        """Test messages are extracted and merged on context and text."""
        extractor.parse_file(app_file)

        assert [message.as_message_data() for message in extractor.get_messages()] == [
            {
                "text": "Foo",
                "textPlural": "Foos",
                "context": "menu",
                "comments": [
                    "Title of the page",
                    "{COUNT}: number of items",
                    "Used twice",
                ],
                "references": [f"{app_file}:3", f"{app_file}:9"],
            },
            {"text": "Bar", "context": "menu", "references": [f"{app_file}:4"]},
            {"text": "Baz", "references": [f"{app_file}:6"]},
        ]

    def test_parse_file_returns_unmerged(self, extractor, app_file):
        """Test parse_file returns every message found in the file."""
        assert [message.text for message in extractor.parse_file(app_file)] == [
            "Foo",
            "Bar",
            "Baz",
            "Foo",
        ]

    def test_parse_files_merges_references(self, extractor, tmp_path):
        """Test the same message in two files collects both references."""
        first = tmp_path / "a.js"
        second = tmp_path / "b.ts"
        first.write_text("_('Save');", encoding="utf-8")
        second.write_text("const s: string = _('Save');", encoding="utf-8")

        messages = extractor.parse_files([str(first), str(second)])

        assert len(messages) == 1
        assert messages[0].references == [f"{first}:1", f"{second}:1"]

    def test_context_separates_messages(self, extractor):
        """Test equal texts with different contexts stay apart."""
        extractor.parse_source("_('Open', null, null, 'menu'); _('Open');")
        assert [(m.context, m.text) for m in extractor.get_messages()] == [
            ("menu", "Open"),
            (None, "Open"),
        ]

    def test_first_plural_wins(self, extractor):
        """Test a later plural does not replace an earlier one."""
        extractor.parse_source("_('File', 'Files'); _('File', 'Many files'); _('File');")
        assert extractor.get_messages()[0].text_plural == "Files"

    def test_conflicting_plural_logged(self, extractor, monkeypatch):
        """Test a conflicting plural is reported as a warning, not an error."""
        logger = RecordingLogger()
        monkeypatch.setattr(extractor_module, "logger", logger)

        extractor.parse_source("_('File', 'Files'); _('File', 'Many files');")

        assert logger.events("warning") == [
            ("conflicting_plural", {"text": "File", "kept": "Files", "ignored": "Many files"})
        ]
        assert extractor.get_messages()[0].text_plural == "Files"

    def test_empty_context_same_as_none(self, extractor):
        """Test an empty context merges with a missing one."""
        extractor.parse_source("_('Open'); _('Open', null, null, '');")

        messages = extractor.get_messages()
        assert len(messages) == 1
        assert messages[0].context is None

    def test_subscript_callee(self, extractor):
        """Test a string subscript callee matches the dotted name."""
        messages = extractor.parse_source("i18n['t']('Hello');")
        assert [message.text for message in messages] == ["Hello"]

    def test_missing_plural_filled_later(self, extractor):
        """Test a plural seen later is added to an earlier message."""
        extractor.parse_source("_('File'); _('File', 'Files');")
        assert extractor.get_messages()[0].text_plural == "Files"

    def test_duplicate_comments_not_repeated(self, extractor):
        """Test repeated comment lines are kept once."""
        extractor.parse_source("_('A', null, 'note'); _('A', null, 'note');")
        assert extractor.get_messages()[0].comments == ["note"]

    def test_parse_source_without_file(self, extractor):
        """Test source text without a path has no references."""
        messages = extractor.parse_source("_('Hello');")
        assert messages[0].references == []

    def test_fallback_and_folding(self):
        """Test folded strings and fallback shifting end to end."""
        js = JsExtractor(
            [
                CallExpressionExtractor(
                    "t",
                    {
                        "arguments": FULL_ARGUMENTS,
                        "comments": {"fallback": True},
                        "content": {"trimWhiteSpace": True},
                    },
                )
            ]
        )
        messages = js.parse_source(
            "t('Hello, ' +\n  'world\\n', {comment: 'Greeting'}, 'home');"
        )

        assert messages[0].as_message_data() == {
            "text": "Hello, world",
            "comments": ["Greeting"],
            "context": "home",
        }

    def test_typescript_language(self, extractor):
        """Test an explicit grammar for source text."""
        messages = extractor.parse_source(
            "const x: number = 1; _<string>('Typed');", language="typescript"
        )
        assert messages[0].text == "Typed"

    def test_tsx_by_extension(self, extractor, tmp_path):
        """Test the grammar is picked from the file extension."""
        path = tmp_path / "view.tsx"
        path.write_text("const v = <p>{_('Label')}</p>;", encoding="utf-8")

        assert extractor.parse_file(str(path))[0].text == "Label"

    def test_unknown_extension_uses_javascript(self, extractor):
        """Test unsupported extensions fall back to the javascript grammar."""
        messages = extractor.parse_source("_('Vue');", file_path="component.vue")
        assert messages[0].references == ["component.vue:1"]

    def test_multiple_extractors(self):
        """Test each extractor sees every call site."""
        js = JsExtractor()
        js.add_extractor(CallExpressionExtractor("_", {"arguments": {"text": 0}}))
        js.add_extractor(CallExpressionExtractor("pgettext", {"arguments": {"context": 0, "text": 1}}))

        js.parse_source("_('A'); pgettext('menu', 'B');")

        assert [(m.context, m.text) for m in js.get_messages()] == [(None, "A"), ("menu", "B")]

    def test_clear(self, extractor):
        """Test clear forgets collected messages."""
        extractor.parse_source("_('A');")
        extractor.clear()
        assert extractor.get_messages() == []


class TestJsExtractorErrors:
    """Tests for error handling in JsExtractor."""

    def test_malformed_comment_recorded(self, extractor, tmp_path):
        """Test a malformed structured comment is recorded with its message identity."""
        path = tmp_path / "bad.js"
        path.write_text("_('Foo', null, {count: 3}, 'ctx');", encoding="utf-8")

        assert extractor.parse_file(str(path)) == []

        [error] = extractor.errors
        assert isinstance(error, MalformedCommentError)
        assert str(error) == (
            "Key count at 'Foo' with id 'ctx' has invalid value. Allowed are string or object."
        )

    def test_malformed_comment_drops_only_its_call(self, extractor, tmp_path):
        """Test call sites after a malformed comment are still extracted."""
        path = tmp_path / "partial.js"
        path.write_text("_('A');\n_('B', null, {n: 1});\n_('C');\n", encoding="utf-8")

        found = extractor.parse_file(str(path))

        assert [message.text for message in found] == ["A", "C"]
        assert [message.text for message in extractor.get_messages()] == ["A", "C"]
        assert [error.text for error in extractor.errors] == ["B"]

    def test_errors_do_not_block_other_files(self, extractor, tmp_path):
        """Test a malformed comment in one file does not stop the next file."""
        first = tmp_path / "a.js"
        second = tmp_path / "b.js"
        first.write_text("_('Bad', null, {n: 1});", encoding="utf-8")
        second.write_text("_('Good');", encoding="utf-8")

        messages = extractor.parse_files([str(first), str(second)])

        assert [message.text for message in messages] == ["Good"]
        assert len(extractor.errors) == 1

    def test_clear_forgets_errors(self, extractor):
        """Test clear drops recorded errors too."""
        extractor.parse_source("_('Bad', null, {n: 1});")
        extractor.clear()
        assert extractor.errors == []

    def test_malformed_comment_skipped(self):
        """Test malformed values are skipped when throwing is disabled."""
        js = JsExtractor(
            [
                CallExpressionExtractor(
                    "_",
                    {"arguments": FULL_ARGUMENTS, "comments": {"throwWhenMalformed": False}},
                )
            ]
        )
        messages = js.parse_source("_('Foo', null, {count: n, comment: 'ok'});")
        assert messages[0].comments == ["ok"]

    def test_missing_file(self, extractor, tmp_path):
        """Test a missing file raises ParseError."""
        with pytest.raises(ParseError):
            extractor.parse_file(str(tmp_path / "missing.js"))

    def test_undecodable_file(self, extractor, tmp_path):
        """Test bytes invalid in the source encoding raise ParseError."""
        path = tmp_path / "latin.js"
        path.write_bytes(b"_('caf\xe9');")

        with pytest.raises(ParseError, match="Cannot decode"):
            extractor.parse_file(str(path))

    def test_source_encoding_setting(self, extractor, tmp_path, monkeypatch):
        """Test the configured source encoding is used to decode files."""
        path = tmp_path / "latin.js"
        path.write_bytes(b"_('caf\xe9');")
        monkeypatch.setattr(settings, "source_encoding", "latin-1")

        assert extractor.parse_file(str(path))[0].text == "café"

    def test_unsupported_language(self, extractor):
        """Test an unknown grammar name is rejected."""
        with pytest.raises(LanguageNotSupportedError):
            extractor.parse_source("_('x');", language="python")
