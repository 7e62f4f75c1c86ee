"""Unit tests for perevod_core.messages models and exceptions."""

import pytest

from perevod_core.exceptions import ProcessingError, ValidationError
from perevod_core.messages import (
    ArgumentKind,
    ExtractedMessage,
    ExtractionConfigError,
    LiteralArgument,
    MalformedCommentError,
)


class TestLiteralArgument:
    """Tests for LiteralArgument.from_value()."""

    @pytest.mark.parametrize(
        "value,kind",
        [
            ("Foo", ArgumentKind.TEXT_LITERAL),
            ("", ArgumentKind.TEXT_LITERAL),
            ({"comment": "c"}, ArgumentKind.STRUCTURED),
            (None, ArgumentKind.OMITTED),
            (0, ArgumentKind.OMITTED),
            (0.0, ArgumentKind.OMITTED),
            (1, ArgumentKind.OTHER),
            (False, ArgumentKind.OTHER),
            (["a"], ArgumentKind.OTHER),
        ],
    )
    def test_kinds(self, value, kind):
        """Test Python values map to literal kinds."""
        assert LiteralArgument.from_value(value).kind == kind

    def test_structured_properties_recursive(self):
        """Test nested dictionaries become nested structured literals."""
        literal = LiteralArgument.from_value({"a": {"b": "c"}, "n": 3})

        assert [prop.key for prop in literal.properties] == ["a", "n"]
        inner = literal.properties[0].value
        assert inner.is_structured
        assert inner.properties[0].value.text == "c"
        assert literal.properties[1].value.kind == ArgumentKind.OTHER

    def test_literal_passthrough(self):
        """Test an existing literal is returned unchanged."""
        literal = LiteralArgument.text_literal("x")
        assert LiteralArgument.from_value(literal) is literal


class TestExtractedMessage:
    """Tests for ExtractedMessage."""

    def test_message_data_uses_aliases(self):
        """Test message data is camelCase and omits unset fields."""
        message = ExtractedMessage(text="File", textPlural="Files", references=["a.js:1"])
        assert message.as_message_data() == {
            "text": "File",
            "textPlural": "Files",
            "references": ["a.js:1"],
        }


class TestExceptions:
    """Tests for extraction exceptions."""

    def test_config_error(self):
        """Test problems are listed in the message and details."""
        error = ExtractionConfigError("Invalid extractor options", problems=["a: x", "b: y"])

        assert isinstance(error, ValidationError)
        assert str(error) == "Invalid extractor options: a: x; b: y"
        assert error.to_dict()["details"]["problems"] == ["a: x", "b: y"]
        assert error.to_dict()["error_code"] == "CFG_001"

    def test_malformed_without_context(self):
        """Test the message omits the context when none was resolved."""
        error = MalformedCommentError(key_path="props.n", text="Foo")

        assert isinstance(error, ProcessingError)
        assert str(error) == (
            "Key props.n at 'Foo' has invalid value. Allowed are string or object."
        )
        assert error.error_code == "MSG_001"
        assert "context" not in error.details
