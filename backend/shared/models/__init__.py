"""Shared data models for the chat bot."""

from .chat import ChatModel
from .routine import RoutineConfig
from .user import User

__all__ = [
    "ChatModel",
    "RoutineConfig",
    "User",
]
