"""
목적: 출력 채널 투영기를 제공한다.
설명: 출력 싱크를 감싸 메시지 게시와 최소 간격이 보장되는 갱신을 제공하며, 플랫폼 속도 제한에는 1회 대기 후 재시도한다.
디자인 패턴: 데코레이터 + 스로틀
참조: src/relay_bot/shared/relay/interface/ports.py, src/relay_bot/integrations/slack/output_sink.py
"""

from __future__ import annotations

from typing import Dict, Optional

from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException
from relay_bot.shared.logging import Logger, create_default_logger
from relay_bot.shared.relay.const import RelayDefaults
from relay_bot.shared.relay.interface import ClockPort, OutputSinkPort
from relay_bot.shared.relay.models import MessageHandle
from relay_bot.shared.relay.utils import MonotonicClock


class OutputProjector:
    """스로틀이 적용된 출력 투영기.

    동작 규칙:
    1. `post`는 세션당 1회, 어떤 갱신보다 먼저 호출된다. 실패는 호출자에게 전파한다.
    2. `update`는 메시지별로 마지막 *성공* 갱신 이후 최소 간격을 지킨다.
       간격 안에 들어온 호출은 건너뛰거나(`defer=False`) 남은 시간만큼 기다린다(`defer=True`).
    3. 플랫폼 속도 제한(`OUTPUT_RATE_LIMITED`)을 받으면 `retry_after`초 대기 후 정확히 1회 재시도한다.
    4. 그 밖의 갱신 실패는 로그만 남기고 삼킨다.

    Args:
        sink: 실제 출력 싱크.
        interval_seconds: 동일 메시지 갱신 사이 최소 간격(초).
        default_retry_after_seconds: Retry-After 값이 없을 때 대기 시간(초).
        clock: 시각/대기 구현체.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        sink: OutputSinkPort,
        interval_seconds: float = RelayDefaults.UPDATE_INTERVAL_SECONDS,
        default_retry_after_seconds: int = RelayDefaults.DEFAULT_RETRY_AFTER_SECONDS,
        clock: Optional[ClockPort] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._sink = sink
        self._interval = max(0.0, float(interval_seconds))
        self._default_retry_after = max(0, int(default_retry_after_seconds))
        self._clock = clock or MonotonicClock()
        self._logger = logger or create_default_logger("OutputProjector")
        self._last_update: Dict[MessageHandle, float] = {}

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def last_update_at(self, handle: MessageHandle) -> Optional[float]:
        """마지막 성공 갱신 시각을 반환한다."""

        return self._last_update.get(handle)

    async def post(self, text: str) -> MessageHandle:
        """새 메시지를 게시한다."""

        handle = await self._sink.post(text)
        self._logger.info(f"output.post: channel={handle.channel}, ts={handle.ts}")
        return handle

    async def update(self, handle: MessageHandle, text: str, defer: bool = False) -> bool:
        """메시지 내용을 교체한다.

        Args:
            handle: 대상 메시지 식별자.
            text: 표시할 전체 텍스트.
            defer: 최소 간격 안이면 건너뛰지 않고 남은 시간만큼 기다릴지 여부.

        Returns:
            갱신이 실제로 반영되었으면 True.
        """

        wait = self._remaining_interval(handle)
        if wait > 0:
            if not defer:
                self._logger.debug(f"output.update.throttled: ts={handle.ts}, wait={wait:.3f}")
                return False
            await self._clock.sleep(wait)

        try:
            await self._sink.update(handle, text)
        except BaseAppException as error:
            if error.code != ErrorCode.OUTPUT_RATE_LIMITED:
                self._logger.error(
                    f"output.update.failed: ts={handle.ts}, code={error.code}",
                    metadata=error.to_dict(),
                )
                return False
            return await self._retry_after_rate_limit(handle, text, error)
        except Exception as error:  # noqa: BLE001 - 갱신 실패는 세션을 중단시키지 않는다
            self._logger.error(f"output.update.failed: ts={handle.ts}, error={error!r}")
            return False

        self._mark_updated(handle)
        return True

    async def _retry_after_rate_limit(
        self,
        handle: MessageHandle,
        text: str,
        error: BaseAppException,
    ) -> bool:
        retry_after = self._resolve_retry_after(error)
        self._logger.warning(f"output.update.rate_limited: ts={handle.ts}, retry_after={retry_after}")
        await self._clock.sleep(retry_after)
        try:
            await self._sink.update(handle, text)
        except Exception as retry_error:  # noqa: BLE001 - 재시도는 1회로 끝낸다
            self._logger.error(f"output.update.retry_failed: ts={handle.ts}, error={retry_error!r}")
            return False
        self._mark_updated(handle)
        return True

    def _resolve_retry_after(self, error: BaseAppException) -> int:
        raw = error.detail.metadata.get("retry_after")
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return self._default_retry_after
        return value if value > 0 else self._default_retry_after

    def _remaining_interval(self, handle: MessageHandle) -> float:
        last = self._last_update.get(handle)
        if last is None:
            return 0.0
        return self._interval - (self._clock.now() - last)

    def _mark_updated(self, handle: MessageHandle) -> None:
        self._last_update[handle] = self._clock.now()
