"""Retry helper for repository write operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_on_db_error(func: Callable[[], Awaitable[T]], max_retries: int = 2) -> T:
    for attempt in range(1, max_retries + 1):
        try:
            return await func()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if attempt < max_retries:
                delay = 0.5 * attempt
                logger.warning(
                    f"DB operation attempt {attempt}/{max_retries} failed: {type(e).__name__}, "
                    f"retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.exception(f"DB operation failed after {max_retries} attempts")
                raise
    raise RuntimeError("unreachable")
