from .chat import Chat, CommandFactory
from .manager import ChatManager

__all__ = [
    "Chat",
    "ChatManager",
    "CommandFactory",
]
