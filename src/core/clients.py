"""
Backend API clients with lazy initialization.
"""

from azure.identity import ClientSecretCredential
from google.oauth2 import service_account
from googleapiclient.discovery import build
from msgraph import GraphServiceClient

from core.config import (
    GOOGLE_SERVICE_ACCOUNT_FILE,
    GRAPH_APP_ID,
    GRAPH_CLIENT_SECRET,
    GRAPH_TENANT_ID,
    SHEETS_SCOPES,
)

_graph_client: GraphServiceClient | None = None
_sheets_service = None


def get_graph_client() -> GraphServiceClient:
    """Get or create the MS Graph client used for calendar access."""
    global _graph_client
    if _graph_client is None:
        credential = ClientSecretCredential(
            tenant_id=GRAPH_TENANT_ID,
            client_id=GRAPH_APP_ID,
            client_secret=GRAPH_CLIENT_SECRET,
        )
        _graph_client = GraphServiceClient(credentials=credential)
    return _graph_client


def get_sheets_service():
    """Get or create the Google Sheets v4 service (service-account auth)."""
    global _sheets_service
    if _sheets_service is None:
        credentials = service_account.Credentials.from_service_account_file(
            GOOGLE_SERVICE_ACCOUNT_FILE, scopes=SHEETS_SCOPES
        )
        _sheets_service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
    return _sheets_service
