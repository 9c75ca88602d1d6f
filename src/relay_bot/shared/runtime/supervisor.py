"""
목적: 프로세스 감독자를 제공한다.
설명: 단일 시도 기동, 처리되지 않은 비동기/동기 예외의 최후 처리기, 종료 신호 대기를 담당한다.
디자인 패턴: 감독자(Supervisor)
참조: src/relay_bot/main.py, src/relay_bot/shared/logging/logger.py
"""

from __future__ import annotations

import asyncio
import signal
import sys
import threading
from types import TracebackType
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from relay_bot.shared.exceptions import BaseAppException
from relay_bot.shared.logging import Logger, create_default_logger

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ProcessSupervisor:
    """프로세스 감독자.

    이벤트 루프와 스레드의 최후 처리기는 로그만 남기고 프로세스를 계속 실행시킨다.
    `sys.excepthook`은 인터프리터가 이미 종료 중일 때 호출되므로 종료 원인을 기록만 한다.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("ProcessSupervisor")
        self._stop_event: Optional[asyncio.Event] = None

    def install(self, loop: asyncio.AbstractEventLoop) -> None:
        """이벤트 루프/인터프리터/스레드 수준 최후 처리기를 설치한다."""

        loop.set_exception_handler(self.handle_loop_exception)
        sys.excepthook = self.handle_uncaught
        threading.excepthook = self.handle_thread_exception
        self._logger.info("supervisor.installed")

    def install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """SIGINT/SIGTERM 수신 시 종료를 요청하도록 등록한다."""

        for sig in _STOP_SIGNALS:
            try:
                loop.add_signal_handler(sig, self.request_stop)
            except (NotImplementedError, RuntimeError):
                self._logger.warning(f"supervisor.signal.unsupported: signal={sig.name}")

    def handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        """처리되지 않은 비동기 예외를 기록한다."""

        error = context.get("exception")
        message = context.get("message", "")
        self._logger.error(
            f"supervisor.unhandled_async: message={message}, error={error!r}",
            metadata=_error_metadata(error),
        )

    def handle_uncaught(
        self,
        exc_type: Type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        """처리되지 않은 동기 예외를 기록한다. 호출 시점에는 인터프리터가 종료 중이다."""

        self._logger.critical(
            f"supervisor.uncaught: type={exc_type.__name__}, error={exc!r}",
            metadata=_error_metadata(exc),
        )

    def handle_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        """스레드에서 처리되지 않은 예외를 기록한다."""

        thread_name = args.thread.name if args.thread is not None else None
        self._logger.critical(
            f"supervisor.uncaught_thread: thread={thread_name}, error={args.exc_value!r}",
            metadata=_error_metadata(args.exc_value),
        )

    async def start(self, starter: Callable[[], Awaitable[Any]]) -> bool:
        """기동 함수를 1회 실행한다. 실패하면 구조화된 오류를 기록하고 False를 반환한다."""

        self._logger.info("supervisor.starting")
        try:
            await starter()
        except Exception as error:  # noqa: BLE001 - 기동 실패는 재시도 없이 기록만 한다
            self._logger.error(
                f"supervisor.start_failed: error={error!r}",
                metadata=_error_metadata(error),
            )
            return False
        self._logger.info("supervisor.started")
        return True

    def request_stop(self) -> None:
        """종료를 요청한다."""

        self._logger.info("supervisor.stop_requested")
        self._ensure_stop_event().set()

    async def wait_for_stop(self) -> None:
        """종료 요청이 들어올 때까지 대기한다."""

        await self._ensure_stop_event().wait()

    def _ensure_stop_event(self) -> asyncio.Event:
        if self._stop_event is None:
            self._stop_event = asyncio.Event()
        return self._stop_event


def _error_metadata(error: Optional[BaseException]) -> Dict[str, Any]:
    if error is None:
        return {}
    if isinstance(error, BaseAppException):
        return error.to_dict()
    metadata: Dict[str, Any] = {"type": type(error).__name__}
    response = getattr(error, "response", None)
    data = getattr(response, "data", None)
    if data is not None:
        metadata["data"] = data
    return metadata
