"""Tests for reply formatting helpers."""

from chatbot.formatting import format_placeholders, format_seconds, plural_form
from shared.models.chat import ChatModel


class TestFormatPlaceholders:
    def test_named_values(self):
        assert format_placeholders("Hi $(user), $(n)!", {"user": "amy", "n": 3}) == "Hi amy, 3!"

    def test_chat_values(self):
        chat = ChatModel("c1", command_prefix="#", language="zh")

        assert format_placeholders("$(prefix)help ($(language))", chat=chat) == "#help (zh)"

    def test_explicit_values_override_chat(self):
        chat = ChatModel("c1", command_prefix="#")

        assert format_placeholders("$(prefix)", {"prefix": "!"}, chat=chat) == "!"

    def test_unknown_names_are_kept(self):
        assert format_placeholders("$(missing) $ (x)") == "$(missing) $ (x)"

    def test_random(self):
        for _ in range(20):
            assert 1 <= int(format_placeholders("$(random 3, 1)")) <= 3

    def test_pick(self):
        assert format_placeholders("$(pick a, b)") in ("a", "b")
        assert format_placeholders("$(pick only)") == "only"


class TestPluralForm:
    def test_singular_and_plural(self):
        forms = ["second", "seconds"]

        assert plural_form(1, forms) == "second"
        assert plural_form(1.0, forms) == "second"
        assert plural_form(0, forms) == "seconds"
        assert plural_form(2.5, forms) == "seconds"

    def test_single_form(self):
        assert plural_form(3, ["秒"]) == "秒"


class TestFormatSeconds:
    def test_rounds_up_to_tenths(self):
        assert format_seconds(60_000) == ("60", 60.0)
        assert format_seconds(1_234) == ("1.3", 1.3)
        assert format_seconds(1) == ("0.1", 0.1)
        assert format_seconds(0) == ("0", 0.0)
