"""Localized strings for the chat bot.

Templates use ``$(name)`` placeholders, filled by
:func:`chatbot.formatting.format_placeholders`. Every chat picks one
language; command triggers from *all* languages are registered so a chat
switching language keeps understanding the old keywords.
"""

from __future__ import annotations

from typing import Any

LANGUAGES: dict[str, dict[str, Any]] = {
    "en": {
        "cooldown": {
            "message": "⏳ Slow down! You can use this command again in $(time) $(second).",
        },
        "times": {
            "second": ["second", "seconds"],
        },
        "errors": {
            "generic": "Something went wrong while running that command, please try again later.",
        },
        "commands": {
            "ping": {
                "triggers": ["ping"],
                "usage": "$(prefix)ping",
                "category": "info",
                "description": "Check that the bot is alive",
                "execution": {"reply": "Pong!"},
            },
            "help": {
                "triggers": ["help", "commands"],
                "usage": "$(prefix)help [command]",
                "category": "info",
                "description": "List the available commands",
                "execution": {
                    "header": "Available commands:",
                    "category": "*$(category)*",
                    "line": "$(prefix)$(name) - $(description)",
                    "detail": "$(prefix)$(name): $(description)\nUsage: $(usage)",
                    "unknown": "No such command: $(query)",
                },
            },
            "donate": {
                "triggers": ["donate"],
                "usage": "$(prefix)donate",
                "category": "info",
                "description": "Support the bot and skip cooldowns",
                "execution": {"reply": "Thank you for considering a donation! ❤️"},
            },
            "prefix": {
                "triggers": ["prefix"],
                "usage": "$(prefix)prefix <new prefix>",
                "category": "admin",
                "description": "Change the command prefix of this chat",
                "execution": {
                    "success": "Command prefix changed to $(prefix)",
                    "invalid": "Please provide a prefix without spaces, e.g. $(prefix)prefix #",
                    "not_admin": "Only group admins can change the prefix.",
                },
            },
            "language": {
                "triggers": ["language", "lang"],
                "usage": "$(prefix)language <$(languages)>",
                "category": "admin",
                "description": "Change the language of this chat",
                "execution": {
                    "success": "Language changed to English.",
                    "invalid": "Unknown language, choose one of: $(languages)",
                    "not_admin": "Only group admins can change the language.",
                },
            },
        },
    },
    "zh": {
        "cooldown": {
            "message": "⏳ 冷卻中，請在 $(time) $(second)後再使用此指令。",
        },
        "times": {
            "second": ["秒", "秒"],
        },
        "errors": {
            "generic": "執行指令時發生錯誤，請稍後再試。",
        },
        "commands": {
            "ping": {
                "triggers": ["ping"],
                "usage": "$(prefix)ping",
                "category": "資訊",
                "description": "確認機器人是否在線",
                "execution": {"reply": "Pong!"},
            },
            "help": {
                "triggers": ["幫助", "指令"],
                "usage": "$(prefix)幫助 [指令]",
                "category": "資訊",
                "description": "列出可用指令",
                "execution": {
                    "header": "可用指令：",
                    "category": "*$(category)*",
                    "line": "$(prefix)$(name) - $(description)",
                    "detail": "$(prefix)$(name)：$(description)\n用法：$(usage)",
                    "unknown": "找不到指令：$(query)",
                },
            },
            "donate": {
                "triggers": ["贊助"],
                "usage": "$(prefix)贊助",
                "category": "資訊",
                "description": "支持機器人並略過冷卻",
                "execution": {"reply": "感謝你的支持！❤️"},
            },
            "prefix": {
                "triggers": ["前綴"],
                "usage": "$(prefix)前綴 <新前綴>",
                "category": "管理",
                "description": "變更此聊天室的指令前綴",
                "execution": {
                    "success": "指令前綴已變更為 $(prefix)",
                    "invalid": "請提供不含空白的前綴，例如 $(prefix)前綴 #",
                    "not_admin": "只有群組管理員可以變更前綴。",
                },
            },
            "language": {
                "triggers": ["語言"],
                "usage": "$(prefix)語言 <$(languages)>",
                "category": "管理",
                "description": "變更此聊天室的語言",
                "execution": {
                    "success": "語言已變更為中文。",
                    "invalid": "未知的語言，可選：$(languages)",
                    "not_admin": "只有群組管理員可以變更語言。",
                },
            },
        },
    },
}


def get_language(language: str) -> dict[str, Any]:
    """Return the string table for *language*, falling back to English."""
    return LANGUAGES.get(language, LANGUAGES["en"])


def command_strings(command: str, language: str) -> dict[str, Any]:
    return get_language(language)["commands"][command]


def command_triggers(command: str) -> list[str]:
    """All trigger keywords of *command* across every language, in order."""
    triggers: list[str] = []
    for table in LANGUAGES.values():
        for trigger in table["commands"][command]["triggers"]:
            if trigger not in triggers:
                triggers.append(trigger)
    return triggers
