"""
목적: 기본 시계 구현을 제공한다.
설명: `time.monotonic`, `asyncio.sleep`, `asyncio.wait_for`에 위임하는 ClockPort 구현체이다.
디자인 패턴: 어댑터
참조: src/relay_bot/shared/relay/interface/ports.py
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, TypeVar

T = TypeVar("T")


class MonotonicClock:
    """단조 시계 구현체."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            return
        await asyncio.sleep(seconds)

    async def wait_for(self, awaitable: Awaitable[T], timeout: float) -> T:
        return await asyncio.wait_for(awaitable, timeout=timeout)
