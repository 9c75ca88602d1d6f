"""
목적: 중계 봇 실행 설정 모델을 제공한다.
설명: Slack 자격 증명, 백엔드 주소, 중계 튜닝 값을 Pydantic 모델로 검증하고 환경 변수에서 조립한다.
디자인 패턴: 설정 객체 + 팩토리 함수
참조: src/relay_bot/shared/config/loader.py, src/relay_bot/main.py
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from relay_bot.shared.config.loader import ConfigLoader
from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail
from relay_bot.shared.logging import Logger

_SECRET_KEYS = (
    "SLACK_BOT_TOKEN",
    "SLACK_SIGNING_SECRET",
    "SLACK_APP_TOKEN",
    "BACKEND_WS_URL",
    "RELAY_ACK_MARKER",
    "RELAY_GREETING_TOKEN",
)
_TUNING_KEYS = (
    "RELAY_SESSION_TIMEOUT_SECONDS",
    "RELAY_UPDATE_INTERVAL_SECONDS",
    "RELAY_DEFAULT_RETRY_AFTER_SECONDS",
    "RELAY_CONNECT_TIMEOUT_SECONDS",
)

DEFAULT_ACK_MARKER = "Connected to ANA Multi-Agent"


class RelaySettings(BaseModel):
    """중계 봇 설정 모델이다.

    자격 증명과 URL은 불투명 문자열로만 다루며, 유효성은 실제 연결/인증 실패로 드러난다.

    Args:
        slack_bot_token: Slack 봇 토큰(xoxb-).
        slack_signing_secret: Slack 서명 비밀값.
        slack_app_token: Socket Mode 앱 레벨 토큰(xapp-).
        backend_ws_url: 백엔드 WebSocket 기본 주소. 세션 ID가 경로로 붙는다.
        relay_ack_marker: 백엔드 준비 완료를 알리는 content 부분 문자열.
        relay_session_timeout_seconds: 연결 시점부터 강제 종료까지의 시간(초).
        relay_update_interval_seconds: 동일 메시지 갱신 사이 최소 간격(초).
        relay_default_retry_after_seconds: Retry-After 누락 시 대기 시간(초).
        relay_connect_timeout_seconds: 백엔드 연결 수립 제한 시간(초).
        relay_greeting_token: 고정 인사 응답을 트리거하는 단어.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    slack_bot_token: str = Field(..., min_length=1)
    slack_signing_secret: str = Field(..., min_length=1)
    slack_app_token: str = Field(..., min_length=1)
    backend_ws_url: str = Field(..., min_length=1)
    relay_ack_marker: str = Field(default=DEFAULT_ACK_MARKER, min_length=1)
    relay_session_timeout_seconds: float = Field(default=30.0, gt=0)
    relay_update_interval_seconds: float = Field(default=1.0, ge=0)
    relay_default_retry_after_seconds: int = Field(default=1, ge=0)
    relay_connect_timeout_seconds: float = Field(default=10.0, gt=0)
    relay_greeting_token: str = Field(default="hello", min_length=1)

    @field_validator("slack_bot_token", "slack_signing_secret", "slack_app_token", "backend_ws_url", mode="before")
    @classmethod
    def _coerce_opaque(cls, value: Any) -> Any:
        if value is None:
            return value
        return str(value).strip()


def load_relay_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    logger: Optional[Logger] = None,
) -> RelaySettings:
    """환경 변수와 오버라이드 값으로 설정을 조립한다.

    Raises:
        BaseAppException: 필수 값이 없거나 형식이 잘못된 경우(CONFIG_INVALID).
    """

    payload = (
        ConfigLoader(logger=logger)
        .add_env(keys=_SECRET_KEYS + _TUNING_KEYS, raw_keys=_SECRET_KEYS)
        .build(overrides=overrides)
    )
    try:
        return RelaySettings.model_validate(payload)
    except ValidationError as error:
        fields = sorted({".".join(str(part) for part in item["loc"]) for item in error.errors()})
        detail = ExceptionDetail(
            code=ErrorCode.CONFIG_INVALID,
            cause=f"invalid_fields={','.join(fields)}",
            hint=".env.sample을 참고해 필수 환경 변수를 설정하세요.",
            metadata={"fields": fields},
        )
        raise BaseAppException("설정 값이 올바르지 않습니다.", detail, original=error) from error
