"""
Google Calendar API client for the revision reminders.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from .models import CalendarEvent

TOKEN_URI = 'https://oauth2.googleapis.com/token'
SCOPES = ['https://www.googleapis.com/auth/calendar']


def _parse_time(value: Dict[str, str]) -> Optional[datetime]:
    raw = value.get('dateTime', value.get('date'))
    if not raw:
        return None
    if 'T' in raw:  # datetime
        return datetime.fromisoformat(raw.replace('Z', '+00:00'))
    return datetime.fromisoformat(raw + 'T00:00:00')  # all-day event


class CalendarClient:
    def __init__(self, client_id: str, client_secret: str, refresh_token: str, service=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.service = service
        if self.service is None:
            self.authenticate()

    @classmethod
    def from_settings(cls, settings) -> "CalendarClient":
        return cls(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            refresh_token=settings.google_refresh_token,
        )

    def authenticate(self):
        """Authenticate with Calendar API using a stored refresh token.

        The access token is fetched lazily by the transport on the first request.
        """
        creds = Credentials(
            token=None,
            refresh_token=self.refresh_token,
            client_id=self.client_id,
            client_secret=self.client_secret,
            token_uri=TOKEN_URI,
            scopes=SCOPES,
        )
        self.service = build('calendar', 'v3', credentials=creds, cache_discovery=False)

    def _to_event(self, event: Dict[str, Any], calendar_id: str) -> CalendarEvent:
        return CalendarEvent(
            id=event.get('id', ''),
            summary=event.get('summary', ''),
            description=event.get('description') or '',
            start_time=_parse_time(event.get('start', {})),
            end_time=_parse_time(event.get('end', {})),
            status=event.get('status', ''),
            color_id=event.get('colorId', ''),
            calendar_id=calendar_id,
        )

    def search_events(self, calendar_id: str, time_min: datetime, time_max: datetime,
                      query: str) -> List[CalendarEvent]:
        """Single event instances overlapping a window whose text matches query."""
        events_result = self.service.events().list(
            calendarId=calendar_id,
            timeMin=time_min.isoformat(),
            timeMax=time_max.isoformat(),
            q=query,
            singleEvents=True,
            orderBy='startTime',
        ).execute()

        return [self._to_event(event, calendar_id) for event in events_result.get('items', [])]

    def create_event(self, calendar_id: str, summary: str, description: str,
                     start_time: datetime, end_time: datetime, time_zone: str,
                     color_id: Optional[str] = None) -> CalendarEvent:
        """Create a new calendar event."""
        event_body = {
            'summary': summary,
            'description': description,
            'start': {
                'dateTime': start_time.isoformat(),
                'timeZone': time_zone,
            },
            'end': {
                'dateTime': end_time.isoformat(),
                'timeZone': time_zone,
            },
        }
        if color_id:
            event_body['colorId'] = color_id

        event = self.service.events().insert(calendarId=calendar_id, body=event_body).execute()
        return self._to_event(event, calendar_id)

    def patch_description(self, calendar_id: str, event_id: str, description: str) -> CalendarEvent:
        """Replace only the description of an existing event."""
        event = self.service.events().patch(
            calendarId=calendar_id,
            eventId=event_id,
            body={'description': description},
        ).execute()
        return self._to_event(event, calendar_id)
