from .blockable_handler import BlockableHandler, Match
from .command_handler import CommandHandler
from .routine_handler import RoutineHandler

__all__ = [
    "BlockableHandler",
    "CommandHandler",
    "Match",
    "RoutineHandler",
]
