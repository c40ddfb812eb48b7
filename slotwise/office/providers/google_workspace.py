"""
Tool: Google Calendar Provider
Purpose: Read Google Calendar events via the Calendar v3 REST API

Implements the CalendarReader interface. Only read operations are supported;
the access token is supplied by the caller and never refreshed here.

Usage:
    from slotwise.office.models import CalendarAccount
    from slotwise.office.providers.google_workspace import GoogleCalendarReader

    reader = GoogleCalendarReader(CalendarAccount(id="me", access_token=token))
    result = await reader.get_events(start, end)

Dependencies:
    - aiohttp (pip install aiohttp)
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

import aiohttp

from slotwise.office.models import CalendarAccount, CalendarEvent, to_local
from slotwise.office.providers.base import CalendarReader


logger = logging.getLogger(__name__)

CALENDAR_API_BASE = "https://www.googleapis.com/calendar/v3"

# Safety stop for runaway pagination
MAX_PAGES = 20


class GoogleCalendarReader(CalendarReader):
    """
    Google Calendar reader.

    Expands recurring events (singleEvents=true) and follows nextPageToken
    until the range is exhausted.
    """

    def __init__(
        self,
        account: CalendarAccount,
        calendar_id: str = "primary",
        page_size: int = 250,
    ):
        self.account = account
        self.calendar_id = calendar_id
        self.page_size = page_size

    @property
    def provider_name(self) -> str:
        return "google"

    def _get_headers(self) -> dict[str, str]:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.account.access_token}",
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        url: str,
        params: dict | None = None,
    ) -> dict[str, Any]:
        """
        Make an authenticated GET request.

        Args:
            url: Full API URL
            params: Query parameters

        Returns:
            dict with response data or error
        """
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, headers=self._get_headers(), params=params) as resp:
                    return await self._handle_response(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return {"success": False, "error": f"Request failed: {e!r}"}

    async def _handle_response(self, resp) -> dict[str, Any]:
        """Handle API response."""
        try:
            data = await resp.json()
        except (aiohttp.ContentTypeError, ValueError):
            data = {}

        if resp.status == 200:
            return {"success": True, "data": data}
        elif resp.status == 401:
            return {"success": False, "error": "Authentication failed - token may be expired"}
        elif resp.status == 403:
            return {"success": False, "error": "Permission denied - insufficient scopes"}
        elif resp.status == 404:
            return {"success": False, "error": f"Calendar not found: {self.calendar_id}"}
        else:
            error_msg = data.get("error", {}).get("message", f"HTTP {resp.status}") if isinstance(data, dict) else f"HTTP {resp.status}"
            return {"success": False, "error": error_msg}

    async def get_events(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> dict[str, Any]:
        """Get calendar events in a date range, following pagination."""
        if not self.account.access_token:
            return {"success": False, "error": "No access token"}
        if self.account.is_token_expired():
            return {"success": False, "error": "Access token expired"}

        params: dict[str, Any] = {
            # Naive datetimes are local; astimezone() attaches the local offset
            "timeMin": start_date.astimezone().isoformat(),
            "timeMax": end_date.astimezone().isoformat(),
            "maxResults": self.page_size,
            "singleEvents": "true",
            "orderBy": "startTime",
        }
        url = f"{CALENDAR_API_BASE}/calendars/{self.calendar_id}/events"

        events: list[CalendarEvent] = []
        for _ in range(MAX_PAGES):
            result = await self._make_request(url, params=params)
            if not result.get("success"):
                return result

            data = result.get("data", {})
            for item in data.get("items", []):
                try:
                    events.append(self._parse_calendar_event(item))
                except (ValueError, TypeError, AttributeError) as e:
                    logger.warning(f"Unparseable event {item.get('id', '?')} in {self.calendar_id}: {e}")
                    return {"success": False, "error": f"Malformed event {item.get('id', '?')}: {e}"}

            page_token = data.get("nextPageToken")
            if not page_token:
                break
            params = {**params, "pageToken": page_token}
        else:
            logger.warning(f"Stopped after {MAX_PAGES} pages for calendar {self.calendar_id}")

        logger.debug(f"Fetched {len(events)} events from {self.calendar_id}")
        return {"success": True, "events": events, "total": len(events)}

    def _parse_calendar_event(self, data: dict) -> CalendarEvent:
        """Parse Google Calendar event into CalendarEvent object."""
        start_data = data.get("start", {})
        end_data = data.get("end", {})

        all_day = "date" in start_data

        if all_day:
            start_time = datetime.fromisoformat(start_data.get("date", ""))
            end_time = datetime.fromisoformat(end_data.get("date", ""))
        else:
            start_str = start_data.get("dateTime", "")
            end_str = end_data.get("dateTime", "")
            # Handle timezone offset
            start_time = to_local(datetime.fromisoformat(start_str.replace("Z", "+00:00")))
            end_time = to_local(datetime.fromisoformat(end_str.replace("Z", "+00:00")))

        return CalendarEvent(
            event_id=data.get("id", ""),
            title=data.get("summary", "No Title"),
            start_time=start_time,
            end_time=end_time,
            all_day=all_day,
            status=data.get("status", "confirmed"),
            busy_status="free" if data.get("transparency") == "transparent" else "busy",
            calendar_id=self.calendar_id,
            provider="google",
        )
