"""Built-in commands, in registration (and help listing) order."""

from chatbot.command.command import LocalizedCommand

from .donate import DonateCommand
from .help import HelpCommand
from .language import LanguageCommand
from .ping import PingCommand
from .prefix import PrefixCommand

USER_COMMANDS: tuple[type[LocalizedCommand], ...] = (
    # group admin commands
    PrefixCommand,
    LanguageCommand,
    # bot info commands
    HelpCommand,
    PingCommand,
    DonateCommand,
)

__all__ = [
    "USER_COMMANDS",
    "DonateCommand",
    "HelpCommand",
    "LanguageCommand",
    "PingCommand",
    "PrefixCommand",
]
