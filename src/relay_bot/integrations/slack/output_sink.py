"""
목적: Slack 출력 싱크 어댑터를 제공한다.
설명: `AsyncWebClient`의 chat.postMessage/chat.update를 OutputSinkPort로 감싸고 Slack 오류를 공통 예외로 변환한다.
디자인 패턴: 어댑터
참조: src/relay_bot/shared/relay/interface/ports.py, src/relay_bot/integrations/slack/blocks.py
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from relay_bot.integrations.slack.blocks import build_section_blocks
from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail
from relay_bot.shared.logging import Logger, create_default_logger
from relay_bot.shared.relay.models import MessageHandle

_RATE_LIMITED_ERRORS = {"ratelimited", "rate_limited"}


class SlackOutputSink:
    """채널 1곳에 메시지를 게시/갱신하는 Slack 출력 싱크.

    Args:
        client: Slack 비동기 웹 클라이언트. 여러 세션이 공유한다.
        channel: 메시지를 게시할 채널 ID.
        logger: 주입 가능한 로거.
    """

    def __init__(self, client: AsyncWebClient, channel: str, logger: Optional[Logger] = None) -> None:
        if not channel:
            raise ValueError("channel은 비어 있을 수 없습니다.")
        self._client = client
        self._channel = channel
        self._logger = logger or create_default_logger("SlackOutputSink")

    @property
    def channel(self) -> str:
        return self._channel

    async def post(self, text: str) -> MessageHandle:
        try:
            response = await self._client.chat_postMessage(
                channel=self._channel,
                text=text,
                blocks=build_section_blocks(text),
            )
        except (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise _to_app_exception(error, ErrorCode.OUTPUT_POST_FAILED, "Slack 메시지를 게시할 수 없습니다.") from error
        return MessageHandle(channel=str(response["channel"]), ts=str(response["ts"]))

    async def update(self, handle: MessageHandle, text: str) -> None:
        try:
            await self._client.chat_update(
                channel=handle.channel,
                ts=handle.ts,
                text=text,
                blocks=build_section_blocks(text),
            )
        except (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise _to_app_exception(error, ErrorCode.OUTPUT_UPDATE_FAILED, "Slack 메시지를 갱신할 수 없습니다.") from error


def _to_app_exception(error: BaseException, code: str, message: str) -> BaseAppException:
    if isinstance(error, SlackApiError):
        slack_error = _slack_error_code(error)
        status_code = getattr(error.response, "status_code", None)
        if slack_error in _RATE_LIMITED_ERRORS or status_code == 429:
            detail = ExceptionDetail(
                code=ErrorCode.OUTPUT_RATE_LIMITED,
                cause=f"slack_error={slack_error}, status={status_code}",
                hint="Retry-After 초만큼 기다린 뒤 다시 시도하세요.",
                metadata={"retry_after": _retry_after(error)},
            )
            return BaseAppException("Slack 속도 제한에 걸렸습니다.", detail, original=error)
        detail = ExceptionDetail(
            code=code,
            cause=f"slack_error={slack_error}, status={status_code}",
            metadata={"slack_error": slack_error},
        )
        return BaseAppException(message, detail, original=error)
    detail = ExceptionDetail(code=code, cause=repr(error))
    return BaseAppException(message, detail, original=error)


def _slack_error_code(error: SlackApiError) -> Optional[str]:
    response: Any = error.response
    try:
        return response.get("error")
    except AttributeError:
        return None


def _retry_after(error: SlackApiError) -> Optional[int]:
    headers = getattr(error.response, "headers", None) or {}
    raw = None
    for key in ("Retry-After", "retry-after"):
        if key in headers:
            raw = headers[key]
            break
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
