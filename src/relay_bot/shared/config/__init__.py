"""
목적: 설정 로더 공개 API를 제공한다.
설명: 일반 설정 병합 로더, 런타임 환경 로더, 중계 봇 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/config/loader.py, src/relay_bot/shared/config/runtime_env_loader.py, src/relay_bot/shared/config/settings.py
"""

from relay_bot.shared.config.loader import ConfigLoader
from relay_bot.shared.config.runtime_env_loader import RuntimeEnvironment, RuntimeEnvironmentLoader
from relay_bot.shared.config.settings import DEFAULT_ACK_MARKER, RelaySettings, load_relay_settings

__all__ = [
    "ConfigLoader",
    "RuntimeEnvironment",
    "RuntimeEnvironmentLoader",
    "RelaySettings",
    "DEFAULT_ACK_MARKER",
    "load_relay_settings",
]
