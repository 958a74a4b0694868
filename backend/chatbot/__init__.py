"""Per-conversation command dispatch for the chat bot."""
