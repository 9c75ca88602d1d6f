"""
목적: 공통 상수 집합을 제공한다.
설명: 시스템 전반에서 사용하는 에러 코드를 정의한다.
디자인 패턴: 상수 객체
참조: src/relay_bot/shared/exceptions/base.py, src/relay_bot/shared/relay/services/output_projector.py
"""


class ErrorCode:
    """시스템 전반에서 사용하는 에러 코드 집합이다."""

    CONFIG_INVALID = "CONFIG_INVALID"
    RELAY_TRANSPORT_FAILED = "RELAY_TRANSPORT_FAILED"
    RELAY_FRAME_INVALID = "RELAY_FRAME_INVALID"
    OUTPUT_RATE_LIMITED = "OUTPUT_RATE_LIMITED"
    OUTPUT_POST_FAILED = "OUTPUT_POST_FAILED"
    OUTPUT_UPDATE_FAILED = "OUTPUT_UPDATE_FAILED"


__all__ = ["ErrorCode"]
