"""Data model for users and their per-chat cooldown ledger."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


class HasCooldown(Protocol):
    name: str
    cooldown: float


@dataclass
class User:
    """A chat participant.

    ``cooldowns`` maps ``chat_id -> command name -> last use`` (epoch
    seconds). The cooldown duration is declared by the command, the ledger
    only remembers when it was last used.
    """

    user_id: str
    cooldowns: dict[str, dict[str, float]] = field(default_factory=dict)
    created_at: datetime | None = None

    def last_used(self, chat_id: str, command_name: str) -> float | None:
        return self.cooldowns.get(chat_id, {}).get(command_name)

    def time_till_cooldown_end(
        self, chat_id: str, command: HasCooldown, *, now: float | None = None
    ) -> int:
        """Milliseconds until *command* can run again in *chat_id* (0 when ready)."""
        if command.cooldown <= 0:
            return 0

        last = self.last_used(chat_id, command.name)
        if last is None:
            return 0

        now = time.time() if now is None else now
        remaining = last + command.cooldown - now
        return max(0, math.ceil(remaining * 1000))

    def add_cooldown(
        self, chat_id: str, command: HasCooldown, *, now: float | None = None
    ) -> float:
        """Stamp *now* as the last use of *command* in *chat_id*."""
        stamp = time.time() if now is None else now
        self.cooldowns.setdefault(chat_id, {})[command.name] = stamp
        return stamp
