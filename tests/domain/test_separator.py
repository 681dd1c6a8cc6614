"""Tests for range separator validation."""

import pytest

from logrange.domain.errors import ErrorKind, InvalidSeparatorError
from logrange.domain.grammar import DISALLOWED_SEPARATOR_CHARS
from logrange.domain.separator import validate_separator


class TestValidateSeparator:
    @pytest.mark.parametrize("sep", ["/", " TO ", "..", " to ", "|", ",", "~"])
    def test_accepted(self, sep: str) -> None:
        assert validate_separator(sep) == sep

    @pytest.mark.parametrize("sep", DISALLOWED_SEPARATOR_CHARS)
    def test_each_disallowed_char_rejected(self, sep: str) -> None:
        with pytest.raises(InvalidSeparatorError) as excinfo:
            validate_separator(sep)
        assert excinfo.value.kind is ErrorKind.INVALID_SEPARATOR

    @pytest.mark.parametrize("sep", ["--", "::", " ", "Ts", "1h", " - "])
    def test_token_alphabet_strings_rejected(self, sep: str) -> None:
        with pytest.raises(InvalidSeparatorError):
            validate_separator(sep)

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidSeparatorError, match="empty"):
            validate_separator("")

    def test_message_names_offending_chars(self) -> None:
        with pytest.raises(InvalidSeparatorError) as excinfo:
            validate_separator("-:")
        assert "'-'" in excinfo.value.reason
        assert "':'" in excinfo.value.reason
