"""Tests for input tokenizing."""

import pytest

from cmdconsole.commands import ParsedInput, tokenize
from cmdconsole.commands.parsing import first_token, is_blank


class TestTokenize:
    """Test whitespace tokenizing."""

    def test_command_and_args(self):
        assert tokenize("echo hello world") == ParsedInput("echo", ("hello", "world"))

    def test_command_name_is_lower_cased(self):
        assert tokenize("ECHO Hello").command_name == "echo"

    def test_args_keep_case_and_order(self):
        assert tokenize("say B a C").args == ("B", "a", "C")

    def test_runs_of_whitespace_are_dropped(self):
        assert tokenize("  frob\t 1   2 \n3  ") == ParsedInput("frob", ("1", "2", "3"))

    def test_command_without_args(self):
        assert tokenize("status") == ParsedInput("status", ())

    @pytest.mark.parametrize("text", ["", "   ", "\t\n", None])
    def test_no_tokens_gives_empty_command(self, text):
        assert tokenize(text) == ParsedInput("", ())

    def test_quotes_are_not_special(self):
        assert tokenize('say "hello world"').args == ('"hello', 'world"')

    def test_stable_across_calls(self):
        text = "Move  north   3"
        assert tokenize(text) == tokenize(text)

    def test_rejoin_is_idempotent(self):
        parsed = tokenize("  Move  north\t3 ")
        rejoined = " ".join((parsed.command_name, *parsed.args))

        assert tokenize(rejoined) == parsed


class TestHelpers:
    """Test small parsing helpers."""

    @pytest.mark.parametrize("text", ["", "  ", None])
    def test_is_blank_true(self, text):
        assert is_blank(text) is True

    def test_is_blank_false(self):
        assert is_blank(" x ") is False

    def test_first_token(self):
        assert first_token("  Ech rest of line") == "Ech"

    def test_first_token_empty(self):
        assert first_token("   ") == ""
        assert first_token(None) == ""
