"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 하위 공통 모듈에 대한 접근 포인트를 제공한다. 중계 모듈은 순환 import를 피하기 위해 지연 로딩한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/exceptions, src/relay_bot/shared/logging, src/relay_bot/shared/relay
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail
from relay_bot.shared.logging import (
    InMemoryLogger,
    InMemoryLogRepository,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    create_default_logger,
)

if TYPE_CHECKING:
    from relay_bot.shared.relay import (
        MessageHandle,
        OutputProjector,
        OutputSinkPort,
        RelaySession,
        SessionSnapshot,
        SessionState,
        StreamingRelay,
    )


_RELAY_EXPORT_NAMES = {
    "MessageHandle",
    "OutputProjector",
    "OutputSinkPort",
    "RelaySession",
    "SessionSnapshot",
    "SessionState",
    "StreamingRelay",
}


def __getattr__(name: str) -> Any:
    if name in _RELAY_EXPORT_NAMES:
        from relay_bot.shared import relay as _relay

        return getattr(_relay, name)
    raise AttributeError(f"module 'relay_bot.shared' has no attribute '{name}'")


__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogger",
    "InMemoryLogRepository",
    "create_default_logger",
    "MessageHandle",
    "OutputProjector",
    "OutputSinkPort",
    "RelaySession",
    "SessionSnapshot",
    "SessionState",
    "StreamingRelay",
]
