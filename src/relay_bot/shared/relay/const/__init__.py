"""
목적: 중계 세션 표시 문구와 기본값을 제공한다.
설명: 자리표시자, 에러/실패 렌더링 문구와 세션 기본 튜닝 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/relay_bot/shared/relay/services/relay_session.py, src/relay_bot/shared/relay/services/output_projector.py
"""


class RelayMessages:
    """출력 메시지에 표시하는 고정 문구 집합이다."""

    PLACEHOLDER = "🤔 Thinking..."
    TRANSPORT_FAILURE = "❌ Sorry, there was an error processing your request."
    BACKEND_ERROR_TEMPLATE = "❌ Error: {error}"

    @classmethod
    def backend_error(cls, error: str) -> str:
        return cls.BACKEND_ERROR_TEMPLATE.format(error=error)


class RelayDefaults:
    """중계 세션 기본 튜닝 값이다."""

    SESSION_TIMEOUT_SECONDS = 30.0
    UPDATE_INTERVAL_SECONDS = 1.0
    DEFAULT_RETRY_AFTER_SECONDS = 1


__all__ = ["RelayMessages", "RelayDefaults"]
