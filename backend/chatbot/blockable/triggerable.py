from __future__ import annotations

from abc import ABC, abstractmethod


class Triggerable(ABC):
    """Recognizes whether a piece of text invokes its owner."""

    @property
    @abstractmethod
    def key(self) -> str:
        """Literal identity of the trigger, unique within one handler."""

    @abstractmethod
    def matches(self, text: str, prefix: str = "") -> bool: ...

    @abstractmethod
    def body(self, text: str, prefix: str = "") -> str:
        """The argument body left after the trigger is consumed."""
