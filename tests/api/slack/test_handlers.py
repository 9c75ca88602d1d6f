"""
목적: Slack 핸들러 등록과 애플리케이션 컨텍스트 조립을 검증한다.
설명: message/app_mention/error 리스너가 등록되고 요청 분류기로 위임되는지 확인한다.
디자인 패턴: 테스트 더블 기반 통합 테스트
참조: src/relay_bot/api/slack/handlers.py, src/relay_bot/api/slack/context.py
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from relay_bot.api.slack import build_app_context, register_handlers
from relay_bot.shared.config import RelaySettings
from relay_bot.shared.relay import StreamingRelay

from relay_fakes import messages, quiet_logger


class _FakeApp:
    def __init__(self) -> None:
        self.client = object()
        self.listeners: Dict[str, Callable[..., Any]] = {}
        self.error_handler: Optional[Callable[..., Any]] = None

    def message(self, *args: Any, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.listeners["message"] = func
            return func

        return decorator

    def event(self, name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.listeners[name] = func
            return func

        return decorator

    def error(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self.error_handler = func
        return func


class _RecordingSay:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    async def __call__(self, **kwargs: Any) -> None:
        self.calls.append(kwargs)


def _settings() -> RelaySettings:
    return RelaySettings(
        slack_bot_token="xoxb-test",
        slack_signing_secret="secret",
        slack_app_token="xapp-test",
        backend_ws_url="ws://backend.local/ws",
        relay_greeting_token="hello",
    )


def test_handlers_are_registered_and_delegate() -> None:
    """message/app_mention 리스너는 요청 분류기로 위임해야 한다."""

    app = _FakeApp()
    logger = quiet_logger()
    context = build_app_context(_settings(), logger=logger, app=app)
    register_handlers(context)
    say = _RecordingSay()

    async def scenario() -> None:
        await app.listeners["message"]({"text": "Hello", "user": "U1", "channel": "C1"}, say)
        await app.listeners["app_mention"]({"text": "<@UBOT>", "user": "U2", "ts": "5.5", "channel": "C1"}, say)

    asyncio.run(scenario())

    assert isinstance(context.relay, StreamingRelay)
    assert set(app.listeners) == {"message", "app_mention"}
    assert "<@U1>" in say.calls[0]["text"]
    assert say.calls[1]["thread_ts"] == "5.5"
    assert "slack.handlers.registered" in messages(logger)


def test_global_error_handler_logs_without_raising() -> None:
    """Bolt 전역 오류 처리기는 기록만 하고 예외를 던지지 않아야 한다."""

    app = _FakeApp()
    logger = quiet_logger()
    register_handlers(build_app_context(_settings(), logger=logger, app=app))

    asyncio.run(app.error_handler(RuntimeError("listener failed"), {"event": {"type": "app_mention"}}))

    assert any(
        message.startswith("slack.listener.unhandled: event=app_mention") for message in messages(logger)
    )
