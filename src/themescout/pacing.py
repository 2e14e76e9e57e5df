# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Fixed-delay request pacing for sequential page visits.

Leaf module, stdlib only. The pause is static: no backoff, no token
bucket, no adaptation to server responses.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(slots=True)
class RequestPacer:
    """Sleeps a fixed *delay_s* each time ``pause()`` is awaited."""

    delay_s: float = 1.0
    sleep: SleepFunc = field(default=asyncio.sleep, repr=False)
    pauses: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {self.delay_s}")

    async def pause(self) -> None:
        self.pauses += 1
        if self.delay_s > 0:
            logger.debug("Pacing: sleeping %.2fs", self.delay_s)
            await self.sleep(self.delay_s)
