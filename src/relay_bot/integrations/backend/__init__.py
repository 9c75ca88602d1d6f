"""
목적: 백엔드 연동 공개 API를 제공한다.
설명: WebSocket 연결 생성기와 연결 어댑터를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/integrations/backend/websocket_connector.py
"""

from relay_bot.integrations.backend.websocket_connector import (
    WebSocketBackendConnection,
    WebSocketBackendConnector,
)

__all__ = ["WebSocketBackendConnection", "WebSocketBackendConnector"]
