import logging
from typing import Callable, List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState
from sqlalchemy.orm import Session

from app.api import deps
from app.models.user import User
from app.utils.timezone import Clock, now_local
from .dismissal import dismiss_reminder
from .metrics import reminders_created_total
from .poller import current_time_key, find_due_reminder
from .repository import create_reminder, delete_reminder, get_reminder, get_user_timezone, list_reminders
from .schemas import DismissalResult, DueReminder, ReminderCreate, ReminderRead
from .watcher import ReminderWatcher

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=ReminderRead, status_code=201)
def create_reminder_endpoint(
    payload: ReminderCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    r = create_reminder(db, current_user.id, payload)
    reminders_created_total.inc()
    return ReminderRead.from_model(r)


@router.get("/", response_model=List[ReminderRead])
def list_reminders_endpoint(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    return [ReminderRead.from_model(r) for r in list_reminders(db, current_user.id)]


@router.get("/due", response_model=DueReminder)
def due_reminder_endpoint(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    clock: Clock = Depends(deps.get_clock),
):
    """One due-check scan for clients that poll over HTTP."""
    time_key = current_time_key(now_local(get_user_timezone(db, current_user.id), clock))
    match = find_due_reminder(list_reminders(db, current_user.id), time_key)
    return DueReminder(
        due=match is not None,
        current_time=time_key,
        reminder=ReminderRead.from_model(match) if match else None,
    )


@router.delete("/{reminder_id}", status_code=204)
def delete_reminder_endpoint(
    reminder_id: str,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    if not delete_reminder(db, current_user.id, reminder_id):
        raise HTTPException(status_code=404, detail="Reminder not found")
    return Response(status_code=204)


@router.post("/{reminder_id}/acknowledge", response_model=DismissalResult)
def acknowledge_reminder_endpoint(
    reminder_id: str,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    session_factory: Callable[[], Session] = Depends(deps.get_session_factory),
):
    r = get_reminder(db, current_user.id, reminder_id)
    if not r:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return dismiss_reminder(session_factory, current_user.id, ReminderRead.from_model(r))


@router.websocket("/ws")
async def reminders_ws(
    websocket: WebSocket,
    token: str = Query(...),
    session_factory: Callable[[], Session] = Depends(deps.get_session_factory),
    clock: Clock = Depends(deps.get_clock),
):
    """
    Push channel for due reminders.

    Server events: reminder_due, alert (repeated until acknowledged),
    reminder_dismissed, reminder_cleared, error. Client messages: acknowledge, check, close.
    """
    db = session_factory()
    try:
        user_id = deps.user_from_token(db, token).id
    except HTTPException as e:
        logger.warning(f"Rejected reminders websocket: {e.detail}")
        await websocket.close(code=1008)
        return
    finally:
        db.close()

    await websocket.accept()
    watcher = ReminderWatcher(user_id, session_factory, websocket.send_json, clock=clock)
    watcher.start()
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"event": "error", "message": "Malformed JSON"})
                continue
            if not isinstance(message, dict):
                await websocket.send_json({"event": "error", "message": "Expected a JSON object"})
                continue
            if not await watcher.handle_message(message):
                break
    except WebSocketDisconnect:
        logger.info(f"Reminders websocket disconnected | user={user_id}")
    finally:
        await watcher.close()
    if websocket.client_state == WebSocketState.CONNECTED:
        await websocket.close()
