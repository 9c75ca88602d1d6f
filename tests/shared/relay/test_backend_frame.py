"""
목적: 백엔드 프레임 파서를 검증한다.
설명: 잘못된 프레임 거부, 확인 응답 표식 감지, 요청 프레임 직렬화를 확인한다.
디자인 패턴: 순수 함수 단위 테스트
참조: src/relay_bot/shared/relay/models/frame.py
"""

from __future__ import annotations

import json

import pytest

from relay_bot.shared.config import DEFAULT_ACK_MARKER
from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException
from relay_bot.shared.relay.models import ChatRequestFrame, FrameType, parse_backend_frame


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"', b"\xff\xfe"])
def test_parse_rejects_non_object_frames(raw) -> None:
    """JSON 객체가 아닌 프레임은 RELAY_FRAME_INVALID로 거부해야 한다."""

    with pytest.raises(BaseAppException) as excinfo:
        parse_backend_frame(raw)
    assert excinfo.value.code == ErrorCode.RELAY_FRAME_INVALID


def test_ack_marker_is_detected_by_substring() -> None:
    """확인 응답은 content의 부분 문자열로 감지해야 한다."""

    frame = parse_backend_frame(json.dumps({"content": f"✅ {DEFAULT_ACK_MARKER} v2"}))
    assert frame.is_ack(DEFAULT_ACK_MARKER) is True
    assert parse_backend_frame('{"content": 3}').is_ack(DEFAULT_ACK_MARKER) is False


def test_frame_accessors() -> None:
    """타입 태그와 에러 설명 접근자가 변형별로 동작해야 한다."""

    chunk = parse_backend_frame(b'{"type": "stream_chunk", "content": "abc", "extra": 1}')
    assert chunk.is_type(FrameType.STREAM_CHUNK)
    assert chunk.text_content() == "abc"
    assert parse_backend_frame('{"type": "error"}').error_text() == "unknown error"
    assert parse_backend_frame('{"type": "error", "error": {"code": 500}}').error_text() == '{"code": 500}'


def test_chat_request_frame_wire_format() -> None:
    """요청 프레임은 type/content 두 필드의 JSON이어야 한다."""

    assert json.loads(ChatRequestFrame(content="안녕").to_wire()) == {"type": "chat", "content": "안녕"}
