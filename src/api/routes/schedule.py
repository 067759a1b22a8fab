"""Schedule and calendar listing endpoints."""

import logging
from datetime import datetime, time

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_calendar, get_spreadsheet, verify_api_key
from api.models.responses import ErrorCodes, ScheduleResponse
from services.backends import BackendError
from services.schedule import build_schedule_payload, load_weeks
from services.shift_times import get_calendar_zone

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_api_key)])


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(sheets=Depends(get_spreadsheet)):
    """
    Parse every visible week tab of the shift spreadsheet.

    Tabs that fail to load are left out; the response still succeeds.
    """
    weeks = await load_weeks(sheets)
    payload = build_schedule_payload(weeks)
    logger.info("Sending schedule data with %d shifts", len(payload["schedule"]))
    return ScheduleResponse(**payload)


@router.get("/events")
async def list_month_events(calendar=Depends(get_calendar)):
    """List calendar events of the current month."""
    tz = get_calendar_zone()
    today = datetime.now(tz).date()
    start_of_month = today.replace(day=1)
    if start_of_month.month == 12:
        start_of_next = start_of_month.replace(year=start_of_month.year + 1, month=1)
    else:
        start_of_next = start_of_month.replace(month=start_of_month.month + 1)

    try:
        events = await calendar.list_events(
            datetime.combine(start_of_month, time.min, tzinfo=tz),
            datetime.combine(start_of_next, time.min, tzinfo=tz),
        )
    except BackendError as e:
        logger.error("Failed to fetch events: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Failed to retrieve events",
                "code": ErrorCodes.BACKEND_ERROR,
                "details": [],
            },
        )

    return [event.to_dict() for event in events]
