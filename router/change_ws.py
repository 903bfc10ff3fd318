# app/router/change_ws.py
import asyncio
import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query, status
from typing import Optional

from core.database import SessionLocal
from core.dependencies import get_session_context_ws
from service.change_manager import manager, WebSocketChangeListener

router = APIRouter(tags=["Change-WS"])


@router.websocket("/ws/changes/{project_id}")
async def change_websocket(
    websocket: WebSocket,
    project_id: int,
    token: Optional[str] = Query(None, description="로그인 토큰")
):
    """
    프로젝트의 신청/주차권/설정 변경 알림을 전달합니다.
    알림을 받은 클라이언트는 목록을 다시 조회합니다.
    """
    # --- 토큰 검증 로직 ---
    db = SessionLocal()
    try:
        ctx = get_session_context_ws(db, token)
    finally:
        db.close()

    if ctx is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Invalid token")
        return
    if not ctx.is_master and ctx.project_id != project_id:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Permission denied")
        return
    # --- 토큰 검증 로직 ---

    # 연결 수락 전에 구독해야 수락 직후 발생한 변경도 전달됩니다.
    listener = WebSocketChangeListener(websocket, asyncio.get_running_loop())
    manager.subscribe(project_id, listener)
    try:
        await websocket.accept()
        forward_task = asyncio.create_task(listener.forward())
        receive_task = asyncio.create_task(_receive_until_disconnect(websocket))
        done, pending = await asyncio.wait({forward_task, receive_task}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        # 취소된 작업이 끝난 뒤에 구독을 해제합니다.
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            if task.exception() and not isinstance(task.exception(), WebSocketDisconnect):
                logging.error(f"Change websocket for project {project_id} closed with error: {task.exception()}")
    finally:
        manager.unsubscribe(project_id, listener)


async def _receive_until_disconnect(websocket: WebSocket):
    # 클라이언트 메시지는 사용하지 않으며 연결 종료만 감지합니다.
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logging.info("Change websocket disconnected.")
