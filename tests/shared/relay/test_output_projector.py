"""
목적: OutputProjector의 스로틀/재시도 동작을 검증한다.
설명: 최소 간격 건너뛰기, 지연 갱신, 플랫폼 속도 제한 1회 재시도, 일반 실패 삼키기를 확인한다.
디자인 패턴: 상태 기반 단위 테스트
참조: src/relay_bot/shared/relay/services/output_projector.py, tests/relay_fakes.py
"""

from __future__ import annotations

import asyncio

from relay_fakes import FakeClock, FakeSink, messages, quiet_logger, rate_limited, update_failed

from relay_bot.shared.relay.models import MessageHandle
from relay_bot.shared.relay.services import OutputProjector


def _projector(sink: FakeSink, clock: FakeClock, **kwargs) -> OutputProjector:
    return OutputProjector(sink=sink, clock=clock, logger=quiet_logger(), **kwargs)


def test_update_skips_calls_inside_interval() -> None:
    """최소 간격 안의 갱신은 싱크를 호출하지 않고 건너뛰어야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock)
    projector = _projector(sink, clock, interval_seconds=1.0)

    async def scenario() -> list[bool]:
        handle = await projector.post("placeholder")
        first = await projector.update(handle, "a")
        clock.advance(0.5)
        second = await projector.update(handle, "ab")
        clock.advance(0.5)
        third = await projector.update(handle, "abc")
        return [first, second, third]

    assert asyncio.run(scenario()) == [True, False, True]
    assert [call.text for call in sink.updates] == ["a", "abc"]
    assert sink.updates[1].at - sink.updates[0].at >= 1.0


def test_deferred_update_waits_out_remaining_interval() -> None:
    """defer=True이면 남은 간격만큼 기다린 뒤 갱신해야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock)
    projector = _projector(sink, clock, interval_seconds=1.0)

    async def scenario() -> bool:
        handle = await projector.post("placeholder")
        await projector.update(handle, "a")
        clock.advance(0.25)
        return await projector.update(handle, "ab", defer=True)

    assert asyncio.run(scenario()) is True
    assert clock.sleeps == [0.75]
    assert [call.text for call in sink.updates] == ["a", "ab"]
    assert sink.updates[1].at - sink.updates[0].at == 1.0


def test_throttle_is_tracked_per_handle() -> None:
    """서로 다른 메시지의 갱신은 서로의 간격에 영향을 주지 않아야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock)
    projector = _projector(sink, clock, interval_seconds=1.0)
    first = MessageHandle(channel="C1", ts="1.0")
    second = MessageHandle(channel="C1", ts="2.0")

    async def scenario() -> list[bool]:
        return [await projector.update(first, "x"), await projector.update(second, "y")]

    assert asyncio.run(scenario()) == [True, True]
    assert projector.last_update_at(first) == projector.last_update_at(second)


def test_rate_limited_update_waits_and_retries_once() -> None:
    """플랫폼 속도 제한이면 retry_after초 대기 후 1회 재시도해야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock, update_errors=[rate_limited(retry_after=3)])
    projector = _projector(sink, clock)

    async def scenario() -> bool:
        handle = await projector.post("placeholder")
        return await projector.update(handle, "hello world")

    assert asyncio.run(scenario()) is True
    assert clock.sleeps == [3]
    assert sink.attempts == 2
    assert sink.last_text == "hello world"


def test_rate_limited_without_retry_after_uses_default() -> None:
    """Retry-After가 없으면 기본 대기 시간을 사용해야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock, update_errors=[rate_limited(retry_after=None)])
    projector = _projector(sink, clock, default_retry_after_seconds=1)

    async def scenario() -> bool:
        handle = await projector.post("placeholder")
        return await projector.update(handle, "x")

    assert asyncio.run(scenario()) is True
    assert clock.sleeps == [1]


def test_rate_limited_retry_is_not_repeated() -> None:
    """재시도마저 실패하면 더 이상 시도하지 않고 False를 반환해야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock, update_errors=[rate_limited(retry_after=2), rate_limited(retry_after=2)])
    logger = quiet_logger()
    projector = OutputProjector(sink=sink, clock=clock, logger=logger)

    async def scenario() -> bool:
        handle = await projector.post("placeholder")
        return await projector.update(handle, "x")

    assert asyncio.run(scenario()) is False
    assert sink.attempts == 2
    assert clock.sleeps == [2]
    assert any(message.startswith("output.update.retry_failed") for message in messages(logger))


def test_other_update_failures_are_logged_and_swallowed() -> None:
    """속도 제한 외의 실패는 로그만 남기고 간격 기록을 바꾸지 않아야 한다."""

    clock = FakeClock()
    sink = FakeSink(clock=clock, update_errors=[update_failed()])
    logger = quiet_logger()
    projector = OutputProjector(sink=sink, clock=clock, logger=logger)

    async def scenario() -> tuple[bool, bool]:
        handle = await projector.post("placeholder")
        failed = await projector.update(handle, "x")
        succeeded = await projector.update(handle, "xy")
        return failed, succeeded

    assert asyncio.run(scenario()) == (False, True)
    assert sink.last_text == "xy"
    assert any(message.startswith("output.update.failed") for message in messages(logger))
