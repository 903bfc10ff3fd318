import asyncio
import logging
import threading
from typing import Dict, List, Protocol

from fastapi import WebSocket

from core import schemas

# 변경 알림 대상 테이블
APPLICATIONS_TABLE = "parking_applications"
PARKING_TYPES_TABLE = "parking_types"
PAGE_SETTINGS_TABLE = "page_settings"
QR_CODES_TABLE = "qr_codes"


class ChangeListener(Protocol):
    def on_external_change(self, table_name: str, event: schemas.ChangeEvent) -> None:
        ...


class ChangeManager:
    """
    프로젝트 단위로 테이블 변경 알림을 구독/발행하는 클래스.
    알림은 '다시 조회하라'는 신호일 뿐이며, 다시 조회할지 병합할지는 구독자가 결정합니다.
    """
    def __init__(self):
        # {project_id: [listener, ...]}
        self.listeners: Dict[int, List[ChangeListener]] = {}
        # 동기 엔드포인트는 스레드풀에서 실행되므로 목록 변경을 잠금으로 보호합니다.
        self._lock = threading.Lock()

    def subscribe(self, project_id: int, listener: ChangeListener):
        with self._lock:
            self.listeners.setdefault(project_id, []).append(listener)
        logging.info(f"Change listener subscribed to project {project_id}.")

    def unsubscribe(self, project_id: int, listener: ChangeListener):
        with self._lock:
            project_listeners = self.listeners.get(project_id, [])
            if listener in project_listeners:
                project_listeners.remove(listener)
            # 구독자가 없으면 프로젝트 항목 자체를 삭제합니다.
            if not project_listeners:
                self.listeners.pop(project_id, None)
        logging.info(f"Change listener unsubscribed from project {project_id}.")

    def publish(self, event: schemas.ChangeEvent):
        with self._lock:
            targets = list(self.listeners.get(event.project_id, []))
        for listener in targets:
            try:
                listener.on_external_change(event.table, event)
            except Exception as e:
                # 구독자 오류가 변경 작업 자체를 실패시키지 않도록 로그만 남깁니다.
                logging.error(f"Change listener failed for {event.table} (project {event.project_id}): {e}")

    def get_listener_count(self, project_id: int) -> int:
        with self._lock:
            return len(self.listeners.get(project_id, []))


class WebSocketChangeListener:
    """변경 알림을 WebSocket 클라이언트로 전달하기 위해 큐에 쌓아두는 구독자"""
    def __init__(self, websocket: WebSocket, loop: asyncio.AbstractEventLoop):
        self.websocket = websocket
        self.loop = loop
        self.queue: asyncio.Queue = asyncio.Queue()

    def on_external_change(self, table_name: str, event: schemas.ChangeEvent) -> None:
        # 발행은 다른 스레드에서 일어날 수 있으므로 이벤트 루프에 위임합니다.
        self.loop.call_soon_threadsafe(self.queue.put_nowait, event)

    async def forward(self):
        while True:
            event = await self.queue.get()
            await self.websocket.send_json(event.model_dump(by_alias=True))


def notify(table: str, event: str, project_id: int, row_ids: List[int] = None):
    manager.publish(schemas.ChangeEvent(table=table, event=event, project_id=project_id, row_ids=row_ids or []))


# 싱글턴 인스턴스로 관리
manager = ChangeManager()
