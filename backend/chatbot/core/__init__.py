"""Core modules for the chat bot."""

from .config import BACKEND_DIR, CHATBOT_DIR, BotSettings, get_settings
from .logging import setup_logging

__all__ = [
    # Settings
    "BotSettings",
    "get_settings",
    # Path Constants
    "CHATBOT_DIR",
    "BACKEND_DIR",
    # Setup functions
    "setup_logging",
]
