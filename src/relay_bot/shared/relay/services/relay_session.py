"""
목적: 요청 1건의 중계 세션 상태 머신을 제공한다.
설명: 생명주기 이벤트를 도착 순서대로 소비해 확인 응답 감지, 요청 전송, 스트림 누적, 출력 메시지 갱신을 수행한다.
디자인 패턴: 상태 머신 + 이벤트 소싱
참조: src/relay_bot/shared/relay/models/event.py, src/relay_bot/shared/relay/services/output_projector.py, src/relay_bot/shared/relay/services/streaming_relay.py
"""

from __future__ import annotations

from typing import Optional

from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail
from relay_bot.shared.logging import LogContext, Logger, create_default_logger
from relay_bot.shared.relay.const import RelayMessages
from relay_bot.shared.relay.interface import BackendConnectionPort
from relay_bot.shared.relay.models import (
    BackendFrame,
    ChatRequestFrame,
    ConnectionClosed,
    ConnectionFailed,
    ConnectionOpened,
    FrameReceived,
    FrameType,
    MessageHandle,
    RelayEvent,
    SessionSnapshot,
    SessionState,
    SessionTimedOut,
    parse_backend_frame,
)
from relay_bot.shared.relay.services.output_projector import OutputProjector


class RelaySession:
    """중계 세션 1건의 상태 머신.

    세션은 요청 1건에만 속하며 연결, 누적 텍스트, 스로틀 시계를 독점한다.
    종료 상태(CLOSED/TIMED_OUT/FAILED)에 들어간 뒤에는 어떤 이벤트도 상태나 출력을 바꾸지 않는다.

    Args:
        session_id: 세션 식별자.
        request_text: 백엔드로 보낼 사용자 요청 원문.
        connection: 이 세션 전용 백엔드 연결.
        projector: 이 세션 전용 출력 투영기.
        ack_marker: 확인 응답으로 간주할 content 부분 문자열.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        session_id: str,
        request_text: str,
        connection: BackendConnectionPort,
        projector: OutputProjector,
        ack_marker: str,
        logger: Optional[Logger] = None,
    ) -> None:
        base_logger = logger or create_default_logger("RelaySession")
        self._logger = base_logger.with_context(LogContext(request_id=session_id))
        self._session_id = session_id
        self._request_text = request_text
        self._connection = connection
        self._projector = projector
        self._ack_marker = ack_marker
        self._state = SessionState.CREATED
        self._acknowledged = False
        self._chunks: list[str] = []
        self._handle: Optional[MessageHandle] = None
        self._displayed_text: Optional[str] = None
        self._error_text: Optional[str] = None
        self._failure: Optional[BaseAppException] = None

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state.is_terminal

    @property
    def acknowledged(self) -> bool:
        return self._acknowledged

    @property
    def text(self) -> str:
        """지금까지 누적된 스트림 텍스트를 반환한다."""

        return "".join(self._chunks)

    @property
    def output_handle(self) -> Optional[MessageHandle]:
        return self._handle

    @property
    def failure(self) -> Optional[BaseAppException]:
        """전송 실패로 종료되었을 때의 예외를 반환한다."""

        return self._failure

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self._session_id,
            state=self._state,
            acknowledged=self._acknowledged,
            text=self.text,
            displayed_text=self._displayed_text,
            handle=self._handle,
            error_text=self._error_text,
        )

    async def handle(self, event: RelayEvent) -> None:
        """이벤트 1건을 소비한다."""

        if self.is_terminal:
            self._logger.debug(
                f"relay.session.event_ignored: state={self._state.value}, event={type(event).__name__}"
            )
            return
        if isinstance(event, ConnectionOpened):
            await self._on_opened()
        elif isinstance(event, FrameReceived):
            await self._on_frame(event.raw)
        elif isinstance(event, ConnectionFailed):
            await self._on_failed(event.error)
        elif isinstance(event, ConnectionClosed):
            await self._on_closed(SessionState.CLOSED, f"code={event.code}, reason={event.reason!r}")
        elif isinstance(event, SessionTimedOut):
            await self._on_closed(SessionState.TIMED_OUT, "reason='timeout'")

    async def _on_opened(self) -> None:
        if self._state is not SessionState.CREATED:
            return
        self._advance(SessionState.AWAITING_ACK)
        self._logger.info("relay.session.opened")
        try:
            self._handle = await self._projector.post(RelayMessages.PLACEHOLDER)
        except Exception as error:  # noqa: BLE001 - 자리표시자 실패 시 출력 없이 계속한다
            self._logger.error(f"relay.session.placeholder_failed: error={error!r}")
            return
        self._displayed_text = RelayMessages.PLACEHOLDER

    async def _on_frame(self, raw: str | bytes) -> None:
        try:
            frame = parse_backend_frame(raw)
        except BaseAppException as error:
            self._logger.warning(f"relay.session.frame_invalid: cause={error.detail.cause}")
            return

        if not self._acknowledged and frame.is_ack(self._ack_marker):
            await self._on_ack()
            return

        if frame.is_type(FrameType.ERROR):
            await self._on_backend_error(frame)
        elif frame.is_type(FrameType.STREAM_CHUNK):
            await self._on_chunk(frame)
        elif frame.is_type(FrameType.STREAM_COMPLETE):
            self._logger.info(f"relay.session.stream_complete: length={len(self.text)}")
            await self._flush()
        else:
            self._logger.debug(f"relay.session.frame_skipped: type={frame.type}")

    async def _on_ack(self) -> None:
        self._acknowledged = True
        self._advance(SessionState.ACKNOWLEDGED)
        self._logger.info("relay.session.ack")
        payload = ChatRequestFrame(content=self._request_text).to_wire()
        try:
            await self._connection.send(payload)
        except BaseAppException as error:
            await self._on_failed(error)
            return
        self._logger.info(f"relay.session.request_sent: length={len(self._request_text)}")

    async def _on_backend_error(self, frame: BackendFrame) -> None:
        self._error_text = frame.error_text()
        self._logger.error(f"relay.session.backend_error: error={self._error_text}")
        if self._handle is None:
            return
        rendered = RelayMessages.backend_error(self._error_text)
        if await self._projector.update(self._handle, rendered, defer=True):
            self._displayed_text = rendered

    async def _on_chunk(self, frame: BackendFrame) -> None:
        content = frame.text_content()
        if not content:
            return
        self._chunks.append(content)
        self._advance(SessionState.STREAMING)
        if self._handle is None or self._error_text is not None:
            return
        text = self.text
        if await self._projector.update(self._handle, text):
            self._displayed_text = text

    async def _on_failed(self, error: BaseException) -> None:
        self._failure = _as_transport_failure(self._session_id, error)
        self._logger.error(f"relay.session.transport_failed: error={error!r}")
        if self._handle is not None:
            try:
                if await self._projector.update(self._handle, RelayMessages.TRANSPORT_FAILURE, defer=True):
                    self._displayed_text = RelayMessages.TRANSPORT_FAILURE
            except Exception as update_error:  # noqa: BLE001 - 실패 안내는 최선 노력이다
                self._logger.error(f"relay.session.failure_notice_failed: error={update_error!r}")
        self._advance(SessionState.FAILED)

    async def _on_closed(self, terminal: SessionState, cause: str) -> None:
        await self._flush()
        self._advance(terminal)
        self._logger.info(f"relay.session.closed: state={terminal.value}, {cause}, length={len(self.text)}")

    async def _flush(self) -> None:
        """스로틀로 합쳐져 아직 표시되지 않은 텍스트를 반영한다."""

        if self._handle is None or self._error_text is not None:
            return
        text = self.text
        if not text or text == self._displayed_text:
            return
        if await self._projector.update(self._handle, text, defer=True):
            self._displayed_text = text

    def _advance(self, state: SessionState) -> None:
        if state.rank > self._state.rank:
            self._state = state


def _as_transport_failure(session_id: str, error: BaseException) -> BaseAppException:
    if isinstance(error, BaseAppException) and error.code == ErrorCode.RELAY_TRANSPORT_FAILED:
        return error
    detail = ExceptionDetail(
        code=ErrorCode.RELAY_TRANSPORT_FAILED,
        cause=repr(error),
        metadata={"session_id": session_id},
    )
    return BaseAppException("백엔드 연결 중 오류가 발생했습니다.", detail, original=error)
