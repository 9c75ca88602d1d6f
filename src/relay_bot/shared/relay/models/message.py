"""
목적: 출력 메시지 식별 모델을 정의한다.
설명: 최초 게시 시 반환되는 (channel, ts) 쌍으로 이후 모든 갱신 대상을 식별한다.
디자인 패턴: 값 객체(Value Object)
참조: src/relay_bot/shared/relay/services/output_projector.py
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MessageHandle(BaseModel):
    """게시된 출력 메시지 식별자이다.

    Args:
        channel: 메시지가 게시된 채널 ID.
        ts: 메시지 타임스탬프(Slack 메시지 ID).
    """

    model_config = ConfigDict(frozen=True)

    channel: str = Field(..., min_length=1)
    ts: str = Field(..., min_length=1)
