"""
목적: 백엔드 수신 프레임 모델과 파서를 정의한다.
설명: JSON 텍스트 프레임을 해석해 ack/stream_chunk/stream_complete/error 변형을 판별한다.
디자인 패턴: 데이터 전송 객체(DTO) + 파서 함수
참조: src/relay_bot/shared/relay/services/relay_session.py
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail


class FrameType(str, Enum):
    """백엔드 프레임 타입 태그."""

    STREAM_CHUNK = "stream_chunk"
    STREAM_COMPLETE = "stream_complete"
    ERROR = "error"


class BackendFrame(BaseModel):
    """백엔드에서 수신한 JSON 프레임이다.

    Args:
        type: 프레임 타입 태그. 확인 응답 프레임처럼 태그가 없을 수도 있다.
        content: ack 문구 또는 스트림 조각.
        error: 에러 설명.
    """

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    content: Any = None
    error: Any = None

    def text_content(self) -> str | None:
        """content가 문자열일 때만 반환한다."""

        if isinstance(self.content, str):
            return self.content
        return None

    def is_ack(self, marker: str) -> bool:
        """content에 확인 응답 표식이 포함되어 있는지 확인한다."""

        content = self.text_content()
        return content is not None and marker in content

    def is_type(self, frame_type: FrameType) -> bool:
        return self.type == frame_type.value

    def error_text(self) -> str:
        """사용자 표시용 에러 설명을 반환한다."""

        if self.error is None:
            return "unknown error"
        if isinstance(self.error, str):
            return self.error
        return json.dumps(self.error, ensure_ascii=False, default=str)


class ChatRequestFrame(BaseModel):
    """확인 응답 이후 1회 전송하는 요청 프레임이다."""

    type: str = Field(default="chat")
    content: str

    def to_wire(self) -> str:
        return json.dumps(self.model_dump(), ensure_ascii=False)


def parse_backend_frame(raw: str | bytes) -> BackendFrame:
    """원시 프레임을 BackendFrame으로 해석한다.

    Raises:
        BaseAppException: JSON이 아니거나 최상위가 객체가 아닌 경우(RELAY_FRAME_INVALID).
    """

    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as error:
        detail = ExceptionDetail(code=ErrorCode.RELAY_FRAME_INVALID, cause=f"invalid_json={raw[:200]!r}")
        raise BaseAppException("백엔드 프레임을 해석할 수 없습니다.", detail, original=error) from error
    if not isinstance(payload, dict):
        detail = ExceptionDetail(
            code=ErrorCode.RELAY_FRAME_INVALID,
            cause=f"payload_type={type(payload).__name__}",
        )
        raise BaseAppException("백엔드 프레임은 JSON 객체여야 합니다.", detail)
    return BackendFrame.model_validate(payload)
