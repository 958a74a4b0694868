from __future__ import annotations

from dataclasses import dataclass

from chatbot.blockable.triggerable import Triggerable


@dataclass(frozen=True)
class CommandTrigger(Triggerable):
    """Matches ``prefix + command`` followed by whitespace or end of text.

    Matching is exact and case-sensitive: with prefix ``!`` the trigger
    ``ping`` matches ``!ping`` and ``!ping now`` but not ``!pingx``,
    ``!Ping`` or ``ping``.
    """

    command: str

    def __post_init__(self) -> None:
        if not self.command or any(ch.isspace() for ch in self.command):
            raise ValueError(f"Invalid command trigger: {self.command!r}")

    @property
    def key(self) -> str:
        return self.command

    def matches(self, text: str, prefix: str = "") -> bool:
        head = prefix + self.command
        if not text.startswith(head):
            return False
        return len(text) == len(head) or text[len(head)].isspace()

    def body(self, text: str, prefix: str = "") -> str:
        # consumes prefix, command and one separator
        return text[len(prefix) + len(self.command) + 1 :]
