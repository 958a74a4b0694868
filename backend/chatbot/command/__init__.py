from .command import Command, LocalizedCommand
from .trigger import CommandTrigger

__all__ = [
    "Command",
    "CommandTrigger",
    "LocalizedCommand",
]
