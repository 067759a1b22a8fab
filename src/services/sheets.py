"""
Google Sheets access for the shift spreadsheet.

The discovery client is synchronous, so every call runs in a worker thread.
"""

import asyncio

from core.clients import get_sheets_service
from core.config import SHEET_COLUMNS, SPREADSHEET_ID
from models.schedule import SheetTab
from services.backends import BackendError


class GoogleSheets:
    """SpreadsheetBackend over the Sheets API v4."""

    def __init__(self, spreadsheet_id: str = SPREADSHEET_ID, service=None):
        self.spreadsheet_id = spreadsheet_id
        self._service = service

    @property
    def service(self):
        if self._service is None:
            self._service = get_sheets_service()
        return self._service

    async def list_tabs(self) -> list[SheetTab]:
        try:
            metadata = await asyncio.to_thread(
                self.service.spreadsheets().get(spreadsheetId=self.spreadsheet_id).execute
            )
        except Exception as e:
            raise BackendError(f"Failed to read spreadsheet metadata: {e}") from e

        tabs = []
        for sheet in metadata.get("sheets", []):
            props = sheet.get("properties", {})
            tabs.append(SheetTab(title=props.get("title", ""), hidden=bool(props.get("hidden"))))
        return tabs

    async def read_rows(self, title: str) -> list[list[str]]:
        # A1 notation quotes the tab name and doubles embedded quotes
        quoted = title.replace("'", "''")
        range_name = f"'{quoted}'!{SHEET_COLUMNS}"
        try:
            response = await asyncio.to_thread(
                self.service.spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=range_name)
                .execute
            )
        except Exception as e:
            raise BackendError(f"Failed to read tab '{title}': {e}") from e

        return response.get("values", [])
