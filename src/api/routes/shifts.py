"""Shift synchronization, undo and event deletion endpoints."""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import (
    get_calendar,
    get_client_ip,
    get_day_locks,
    get_session_id,
    get_spreadsheet,
    get_undo_store,
    verify_api_key,
)
from api.logging import RequestLog, log_request
from api.models import (
    AddShiftsRequest,
    AddShiftsResponse,
    DeleteEventResponse,
    ErrorCodes,
    UndoResponse,
)
from models.events import UndoBatch
from services.backends import BackendError, EventNotFoundError
from services.schedule import all_records, load_weeks
from services.sync import ShiftSynchronizer
from services.undo import undo_last

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_api_key)])


def _write_log(request_log: RequestLog, start_time: float) -> None:
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    try:
        log_request(request_log)
    except Exception as e:
        # Don't fail the request if logging fails
        logger.warning("Could not write request log: %s", e)


@router.post("/add-shifts", response_model=AddShiftsResponse)
async def add_shifts(
    request: Request,
    body: AddShiftsRequest,
    session_id: str = Depends(get_session_id),
    calendar=Depends(get_calendar),
    sheets=Depends(get_spreadsheet),
    undo_store=Depends(get_undo_store),
    day_locks=Depends(get_day_locks),
):
    """
    Create calendar events for the selected shifts of one employee.

    Duplicates are skipped; selections that cannot be resolved are reported
    as dropped. Created events become the session's newest undo batch.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/add-shifts",
        method="POST",
        client_ip=get_client_ip(request),
        session_id=session_id,
        employee_name=body.employee_name,
    )

    try:
        weeks = await load_weeks(sheets)
        synchronizer = ShiftSynchronizer(calendar, all_records(weeks), locks=day_locks)
        result = await synchronizer.sync(
            body.employee_name,
            [selection.to_selection() for selection in body.shifts],
            color=body.color_id,
        )

        if result.added:
            undo_store.record(
                session_id, UndoBatch(employee_name=body.employee_name, events=result.added)
            )

        request_log.status_code = 200
        request_log.events_added = len(result.added)
        request_log.events_skipped = len(result.skipped)
        request_log.events_dropped = len(result.dropped)
        for item in result.skipped + result.dropped:
            request_log.details.append(
                ("warning", f"{item.shift} on {item.date}: {item.reason}")
            )

        return AddShiftsResponse(
            success=True,
            message=result.message,
            added_events=[entry.to_dict() for entry in result.added],
            skipped_events=[item.to_dict() for item in result.skipped],
            dropped_events=[item.to_dict() for item in result.dropped],
        )

    except Exception as e:
        logger.exception("Error adding shifts to calendar")
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Failed to add shifts to calendar",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        _write_log(request_log, start_time)


@router.post("/undo-last-events", response_model=UndoResponse)
async def undo_last_events(
    request: Request,
    session_id: str = Depends(get_session_id),
    calendar=Depends(get_calendar),
    undo_store=Depends(get_undo_store),
):
    """Delete the events created by this session's most recent add-shifts call."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/undo-last-events",
        method="POST",
        client_ip=get_client_ip(request),
        session_id=session_id,
        status_code=200,
    )

    try:
        ledger = undo_store.ledger(session_id)
        outcome = await undo_last(ledger, calendar) if ledger is not None else None
        undo_store.discard_empty(session_id)
        if outcome is None:
            request_log.events_deleted = 0
            return UndoResponse(success=False, message="No recent events to undo")

        request_log.employee_name = outcome.batch.employee_name
        request_log.events_deleted = len(outcome.deleted)
        return UndoResponse(
            success=True,
            message=outcome.message,
            deleted_events=[entry.to_dict() for entry in outcome.deleted],
        )
    finally:
        _write_log(request_log, start_time)


@router.delete("/delete-event/{event_id}", response_model=DeleteEventResponse)
async def delete_event(event_id: str, calendar=Depends(get_calendar)):
    """Delete one calendar event by id."""
    if not event_id.strip() or event_id == "undefined":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Valid Event ID is required",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [],
            },
        )

    try:
        event = await calendar.get_event(event_id)
        await calendar.delete_event(event_id)
    except EventNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "Event not found or already deleted",
                "code": ErrorCodes.NOT_FOUND,
                "details": [event_id],
            },
        )
    except BackendError as e:
        logger.error("Error deleting event %s: %s", event_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Failed to delete event",
                "code": ErrorCodes.BACKEND_ERROR,
                "details": [],
            },
        )

    logger.info("Deleted event: %s", event.summary)
    return DeleteEventResponse(
        success=True,
        message=f"Deleted event: {event.summary}",
        deleted_event=event.to_dict(),
    )
