"""
목적: 중계 유틸리티 공개 API를 제공한다.
설명: 세션 ID 생성, 백엔드 주소 조립, 기본 시계를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/relay/utils/session_id.py, src/relay_bot/shared/relay/utils/clock.py
"""

from relay_bot.shared.relay.utils.clock import MonotonicClock
from relay_bot.shared.relay.utils.session_id import build_backend_url, generate_session_id

__all__ = ["MonotonicClock", "build_backend_url", "generate_session_id"]
