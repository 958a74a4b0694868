"""Repository layer for the chat bot."""

from .chat import ChatRepository
from .routine import RoutineRepository
from .user import UserRepository

__all__ = [
    "ChatRepository",
    "RoutineRepository",
    "UserRepository",
]
