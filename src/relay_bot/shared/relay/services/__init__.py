"""
목적: 중계 서비스 공개 API를 제공한다.
설명: 출력 투영기, 세션 상태 머신, 스트리밍 중계 실행기를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/relay/services/output_projector.py, src/relay_bot/shared/relay/services/relay_session.py, src/relay_bot/shared/relay/services/streaming_relay.py
"""

from relay_bot.shared.relay.services.output_projector import OutputProjector
from relay_bot.shared.relay.services.relay_session import RelaySession
from relay_bot.shared.relay.services.streaming_relay import StreamingRelay

__all__ = ["OutputProjector", "RelaySession", "StreamingRelay"]
