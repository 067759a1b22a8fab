"""
Calendar event access through MS Graph.

Events are read and written in CALENDAR_TIME_ZONE: the Prefer header makes
Graph return wall-clock times in that zone, and new events are created with
the same zone so the calendar shows the shift times as written.
"""

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from kiota_abstractions.base_request_configuration import RequestConfiguration
from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.date_time_time_zone import DateTimeTimeZone
from msgraph.generated.models.event import Event
from msgraph.generated.models.item_body import ItemBody
from msgraph.generated.users.item.calendars.item.calendar_view.calendar_view_request_builder import (
    CalendarViewRequestBuilder,
)

from core.clients import get_graph_client
from core.config import CALENDAR_ID, CALENDAR_TIME_ZONE, CALENDAR_USER_ID
from models.events import CalendarEventRef, ResolvedShift
from services.backends import BackendError, EventNotFoundError

logger = logging.getLogger(__name__)

GRAPH_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class GraphCalendar:
    """CalendarBackend over one MS365 user calendar."""

    def __init__(
        self,
        user_id: str = CALENDAR_USER_ID,
        calendar_id: str = CALENDAR_ID,
        time_zone: str = CALENDAR_TIME_ZONE,
        graph=None,
    ):
        self.user_id = user_id
        self.calendar_id = calendar_id
        self.time_zone = time_zone
        self._graph = graph

    @property
    def calendar(self):
        graph = self._graph or get_graph_client()
        return graph.users.by_user_id(self.user_id).calendars.by_calendar_id(self.calendar_id)

    def _request_config(self, query_parameters=None) -> RequestConfiguration:
        config = RequestConfiguration(query_parameters=query_parameters)
        config.headers.add("Prefer", f'outlook.timezone="{self.time_zone}"')
        return config

    async def list_events(self, start: datetime, end: datetime) -> list[CalendarEventRef]:
        """List events overlapping [start, end], all-day events included, across all pages."""
        query_params = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetQueryParameters(
            start_date_time=start.isoformat(),
            end_date_time=end.isoformat(),
            top=100,
        )
        raw_events = []
        try:
            response = await self.calendar.calendar_view.get(
                request_configuration=self._request_config(query_params)
            )
            while response:
                raw_events.extend(response.value or [])
                next_link = getattr(response, "odata_next_link", None)
                if not next_link:
                    break
                response = await self.calendar.calendar_view.with_url(next_link).get(
                    request_configuration=self._request_config()
                )
        except Exception as e:
            raise BackendError(f"Failed to list events: {e}") from e

        return [self.parse_event(event) for event in raw_events]

    async def create_event(self, shift: ResolvedShift) -> CalendarEventRef:
        if shift.is_all_day:
            # Graph all-day events end at midnight after the last day
            start_value = datetime.combine(shift.start, datetime.min.time())
            end_value = datetime.combine(shift.end + timedelta(days=1), datetime.min.time())
        else:
            start_value, end_value = shift.start, shift.end

        event = Event(
            subject=shift.summary,
            body=ItemBody(content_type=BodyType.Text, content=shift.description),
            start=DateTimeTimeZone(
                date_time=start_value.strftime(GRAPH_DATETIME_FORMAT), time_zone=self.time_zone
            ),
            end=DateTimeTimeZone(
                date_time=end_value.strftime(GRAPH_DATETIME_FORMAT), time_zone=self.time_zone
            ),
            is_all_day=shift.is_all_day,
            categories=[shift.color] if shift.color else None,
        )

        try:
            created = await self.calendar.events.post(event)
        except Exception as e:
            raise BackendError(f"Failed to create event '{shift.summary}': {e}") from e

        logger.info("Created event %s: %s", created.id, shift.summary)
        return CalendarEventRef(
            event_id=created.id,
            summary=shift.summary,
            start=shift.start,
            end=shift.end,
            is_all_day=shift.is_all_day,
        )

    async def delete_event(self, event_id: str) -> None:
        try:
            await self.calendar.events.by_event_id(event_id).delete()
        except Exception as e:
            if _is_not_found(e):
                raise EventNotFoundError(event_id) from e
            raise BackendError(f"Failed to delete event {event_id}: {e}") from e

    async def get_event(self, event_id: str) -> CalendarEventRef:
        try:
            event = await self.calendar.events.by_event_id(event_id).get(
                request_configuration=self._request_config()
            )
        except Exception as e:
            if _is_not_found(e):
                raise EventNotFoundError(event_id) from e
            raise BackendError(f"Failed to get event {event_id}: {e}") from e

        if event is None:
            raise EventNotFoundError(event_id)
        return self.parse_event(event)

    def parse_event(self, event) -> CalendarEventRef:
        """Parse an MS Graph event into a CalendarEventRef."""
        is_all_day = bool(event.is_all_day)
        start = self._parse_graph_datetime(event.start, is_all_day)
        end = self._parse_graph_datetime(event.end, is_all_day)
        if is_all_day and isinstance(end, date) and start is not None and end > start:
            end = end - timedelta(days=1)

        return CalendarEventRef(
            event_id=event.id or "",
            summary=event.subject or "",
            start=start,
            end=end,
            is_all_day=is_all_day,
        )

    def _parse_graph_datetime(self, value, is_all_day: bool) -> datetime | date | None:
        if value is None or not value.date_time:
            return None
        try:
            # Graph sends seven fractional digits, which fromisoformat rejects
            parsed = datetime.fromisoformat(value.date_time[:19])
        except ValueError:
            logger.warning("Unparseable event time: %s", value.date_time)
            return None

        if is_all_day:
            return parsed.date()
        # Graph may echo a Windows zone name; times are in the Prefer zone unless UTC
        zone_name = "UTC" if value.time_zone == "UTC" else self.time_zone
        return parsed.replace(tzinfo=ZoneInfo(zone_name))


def _is_not_found(error: Exception) -> bool:
    return getattr(error, "response_status_code", None) == 404
