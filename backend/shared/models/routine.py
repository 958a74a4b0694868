"""Routine (auto-response) config model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RoutineConfig:
    id: int
    chat_id: str
    routine_name: str
    match_type: str  # 'contains' | 'startswith' | 'exact' | 'regex'
    pattern: str
    response: str
    case_sensitive: bool = False
    cooldown: int = 0
    priority: int = 0
    enabled: bool = True
