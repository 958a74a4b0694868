"""Tests for command and routine trigger matching."""

import re

import pytest

from chatbot.command.trigger import CommandTrigger
from chatbot.routine import RoutineTrigger, build_routines
from shared.models.routine import RoutineConfig


class TestCommandTrigger:
    def test_exact_command_matches_with_empty_body(self):
        trigger = CommandTrigger("ping")

        assert trigger.matches("!ping", "!")
        assert trigger.body("!ping", "!") == ""

    def test_command_with_argument(self):
        trigger = CommandTrigger("ping")

        assert trigger.matches("!ping now", "!")
        assert trigger.body("!ping now", "!") == "now"

    def test_separator_required(self):
        assert not CommandTrigger("ping").matches("!pingx", "!")

    def test_prefix_required(self):
        assert not CommandTrigger("ping").matches("ping", "!")

    def test_case_sensitive(self):
        assert not CommandTrigger("ping").matches("!Ping", "!")

    def test_any_whitespace_separates(self):
        trigger = CommandTrigger("ping")

        assert trigger.matches("!ping\nnow", "!")
        assert trigger.body("!ping\nnow", "!") == "now"

    def test_only_one_separator_consumed(self):
        trigger = CommandTrigger("say")

        assert trigger.body("!say   hello  ", "!") == "  hello  "

    def test_empty_prefix(self):
        trigger = CommandTrigger("ping")

        assert trigger.matches("ping", "")
        assert trigger.matches("ping a b", "")
        assert trigger.body("ping a b", "") == "a b"

    def test_multi_character_prefix(self):
        trigger = CommandTrigger("ping")

        assert trigger.matches("!!ping", "!!")
        assert not trigger.matches("!ping", "!!")

    @pytest.mark.parametrize("command", ["", "two words", "tab\tbed"])
    def test_invalid_command_rejected(self, command):
        with pytest.raises(ValueError):
            CommandTrigger(command)

    def test_triggers_are_immutable(self):
        trigger = CommandTrigger("ping")

        with pytest.raises(AttributeError):
            trigger.command = "pong"  # type: ignore[misc]


class TestRoutineTrigger:
    def test_contains_is_case_insensitive_by_default(self):
        trigger = RoutineTrigger("contains", "hello")

        assert trigger.matches("well HELLO there")
        assert not trigger.matches("goodbye")

    def test_case_sensitive_contains(self):
        trigger = RoutineTrigger("contains", "Hello", case_sensitive=True)

        assert trigger.matches("Hello world")
        assert not trigger.matches("hello world")

    def test_startswith_and_exact(self):
        assert RoutineTrigger("startswith", "gm").matches("GM everyone")
        assert not RoutineTrigger("startswith", "gm").matches("big gm")
        assert RoutineTrigger("exact", "hi").matches("Hi")
        assert not RoutineTrigger("exact", "hi").matches("hi there")

    def test_regex(self):
        trigger = RoutineTrigger("regex", r"\bbots?\b")

        assert trigger.matches("is this a BOT?")
        assert not trigger.matches("robotics")

    def test_body_is_whole_text(self):
        assert RoutineTrigger("contains", "x").body("a x b", "!") == "a x b"

    def test_unknown_match_type(self):
        with pytest.raises(ValueError):
            RoutineTrigger("fuzzy", "x")

    def test_invalid_regex(self):
        with pytest.raises(re.error):
            RoutineTrigger("regex", "(")


def _config(routine_name, pattern, **kwargs):
    return RoutineConfig(
        id=len(routine_name),
        chat_id="chat-1",
        routine_name=routine_name,
        match_type=kwargs.pop("match_type", "contains"),
        pattern=pattern,
        response="hi",
        **kwargs,
    )


class TestBuildRoutines:
    def test_skips_invalid_patterns(self):
        routines = build_routines(
            [_config("bad", "(unclosed", match_type="regex"), _config("ok", "hi")]
        )

        assert [r.name for r in routines] == ["routine:ok"]

    def test_first_routine_keeps_a_shared_trigger(self):
        routines = build_routines(
            [
                _config("greet", "hello"),
                _config("greet2", "hello", case_sensitive=True),
                _config("bye", "bye"),
            ]
        )

        assert [r.name for r in routines] == ["routine:greet", "routine:bye"]
