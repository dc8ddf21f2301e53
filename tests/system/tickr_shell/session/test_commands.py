"""Unit tests for command parsing and help text."""

import pytest

from system.tickr_shell.errors import InputFormatError
from system.tickr_shell.session.commands import COMMANDS, Command, help_lines, parse_command


class TestParseCommand:
    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank_lines(self, line):
        assert parse_command(line) is None

    @pytest.mark.parametrize("verb", ["subscribe", "unsubscribe", "query", "graph", "history"])
    def test_symbol_verbs(self, verb):
        assert parse_command(f"{verb} AAPL") == Command(verb=verb, argument="AAPL")

    @pytest.mark.parametrize("verb", ["list", "help", "clear", "exit"])
    def test_bare_verbs(self, verb):
        assert parse_command(verb) == Command(verb=verb)

    def test_bare_verb_ignores_argument(self):
        assert parse_command("list AAPL") == Command(verb="list")

    def test_extra_tokens_ignored(self):
        assert parse_command("  query   MSFT  now please ") == Command(verb="query", argument="MSFT")

    def test_currency(self):
        assert parse_command("currency eur") == Command(verb="currency", argument="eur")

    def test_missing_argument(self):
        with pytest.raises(InputFormatError, match=r"Usage: subscribe <symbol>"):
            parse_command("subscribe")

    def test_unknown_verb(self):
        with pytest.raises(InputFormatError) as exc_info:
            parse_command("buy AAPL")

        assert str(exc_info.value) == (
            "Unknown command: buy\nType 'help' for available commands and safety tips."
        )

    def test_verbs_are_case_sensitive(self):
        with pytest.raises(InputFormatError, match="Unknown command: LIST"):
            parse_command("LIST")


class TestHelp:
    def test_every_verb_is_documented(self):
        text = "\n".join(help_lines())

        for verb in COMMANDS:
            assert verb in text

    def test_usage_strings(self):
        assert COMMANDS["graph"].usage == "graph <symbol>"
        assert COMMANDS["currency"].usage == "currency <code>"
        assert COMMANDS["exit"].usage == "exit"

    def test_safety_tips_included(self):
        assert "Safety Tips:" in help_lines()
