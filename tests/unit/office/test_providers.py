"""Tests for slotwise/office/providers/

Covers the dict-to-exception bridge in CalendarReader, the in-memory reader's
range semantics, and Google Calendar parsing and pagination with the HTTP
layer patched out.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from slotwise.config_models import SchedulingConfig
from slotwise.office.calendar.scheduler import suggest_meeting_times
from slotwise.office.errors import UpstreamFetchError
from slotwise.office.models import BusyInterval, CalendarAccount, CalendarEvent, to_local
from slotwise.office.providers.google_workspace import GoogleCalendarReader
from slotwise.office.providers.memory import InMemoryCalendarReader


def hm(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute)


# ─────────────────────────────────────────────────────────────────────────────
# In-memory reader
# ─────────────────────────────────────────────────────────────────────────────


class TestInMemoryReader:
    @pytest.mark.asyncio
    async def test_range_is_exclusive_at_both_ends(self, make_reader, tuesday):
        reader = make_reader([
            (hm(tuesday, 8), hm(tuesday, 9)),
            (hm(tuesday, 9), hm(tuesday, 10)),
            (hm(tuesday, 11), hm(tuesday, 12)),
        ])

        busy = await reader.list_busy_intervals(hm(tuesday, 9), hm(tuesday, 11))

        assert busy == [BusyInterval(hm(tuesday, 9), hm(tuesday, 10))]

    @pytest.mark.asyncio
    async def test_cancelled_events_dropped(self, tuesday):
        reader = InMemoryCalendarReader([
            CalendarEvent(event_id="a", start_time=hm(tuesday, 9), end_time=hm(tuesday, 10)),
            CalendarEvent(event_id="b", start_time=hm(tuesday, 10), end_time=hm(tuesday, 11), status="cancelled"),
        ])

        events = await reader.list_events(tuesday, tuesday + timedelta(days=1))

        assert [e.event_id for e in events] == ["a"]

    @pytest.mark.asyncio
    async def test_error_becomes_upstream_fetch_error(self, failing_reader, tuesday):
        with pytest.raises(UpstreamFetchError) as exc_info:
            await failing_reader.list_busy_intervals(tuesday, tuesday + timedelta(days=1))

        assert exc_info.value.provider == "memory"
        assert str(exc_info.value).startswith("memory: ")


# ─────────────────────────────────────────────────────────────────────────────
# Google Calendar reader
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def google_reader():
    return GoogleCalendarReader(CalendarAccount(id="acct", access_token="token-123"), page_size=2)


def google_item(event_id: str, start: str, end: str, **extra) -> dict:
    return {"id": event_id, "summary": f"Event {event_id}", "start": {"dateTime": start}, "end": {"dateTime": end}, **extra}


class TestGoogleCalendarReader:
    @pytest.mark.asyncio
    async def test_follows_pagination(self, google_reader, tuesday):
        pages = [
            {"success": True, "data": {
                "items": [google_item("1", "2026-10-20T09:00:00Z", "2026-10-20T10:00:00Z")],
                "nextPageToken": "page-2",
            }},
            {"success": True, "data": {
                "items": [google_item("2", "2026-10-20T11:00:00Z", "2026-10-20T12:00:00Z")],
            }},
        ]

        with patch.object(google_reader, "_make_request", AsyncMock(side_effect=pages)) as mock_request:
            result = await google_reader.get_events(tuesday, tuesday + timedelta(days=1))

        assert result["success"] is True
        assert [e.event_id for e in result["events"]] == ["1", "2"]
        assert mock_request.await_count == 2
        second_params = mock_request.await_args_list[1].kwargs["params"]
        assert second_params["pageToken"] == "page-2"
        assert second_params["singleEvents"] == "true"
        assert second_params["maxResults"] == 2

    @pytest.mark.asyncio
    async def test_times_converted_to_local(self, google_reader, tuesday):
        page = {"success": True, "data": {"items": [
            google_item("1", "2026-10-20T09:00:00Z", "2026-10-20T09:30:00Z"),
        ]}}

        with patch.object(google_reader, "_make_request", AsyncMock(return_value=page)):
            busy = await google_reader.list_busy_intervals(tuesday, tuesday + timedelta(days=1))

        expected_start = to_local(datetime(2026, 10, 20, 9, tzinfo=timezone.utc))
        assert busy == [BusyInterval(expected_start, expected_start + timedelta(minutes=30))]
        assert busy[0].start.tzinfo is None

    @pytest.mark.asyncio
    async def test_all_day_and_transparent_events(self, google_reader, tuesday):
        page = {"success": True, "data": {"items": [
            {"id": "holiday", "start": {"date": "2026-10-20"}, "end": {"date": "2026-10-21"}},
            google_item("focus", "2026-10-20T09:00:00+00:00", "2026-10-20T10:00:00+00:00", transparency="transparent"),
        ]}}

        with patch.object(google_reader, "_make_request", AsyncMock(return_value=page)):
            result = await google_reader.get_events(tuesday, tuesday + timedelta(days=1))

        holiday, focus = result["events"]
        assert holiday.all_day is True
        assert holiday.start_time == datetime(2026, 10, 20)
        assert holiday.duration_minutes == 24 * 60
        assert holiday.title == "No Title"
        assert focus.busy_status == "free"
        assert focus.provider == "google"

    @pytest.mark.asyncio
    async def test_request_error_raises_upstream(self, google_reader, tuesday):
        failure = {"success": False, "error": "Permission denied - insufficient scopes"}

        with patch.object(google_reader, "_make_request", AsyncMock(return_value=failure)):
            with pytest.raises(UpstreamFetchError, match="insufficient scopes"):
                await google_reader.list_busy_intervals(tuesday, tuesday + timedelta(days=1))

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream(self, google_reader, tuesday):
        with patch("slotwise.office.providers.google_workspace.aiohttp.ClientSession") as mock_session:
            mock_session.return_value.__aenter__.side_effect = asyncio.TimeoutError()

            with pytest.raises(UpstreamFetchError, match="Request failed"):
                await google_reader.list_busy_intervals(tuesday, tuesday + timedelta(days=1))

    @pytest.mark.asyncio
    async def test_timeout_becomes_error_result(self, google_reader, tuesday):
        with patch("slotwise.office.providers.google_workspace.aiohttp.ClientSession") as mock_session:
            mock_session.return_value.__aenter__.side_effect = asyncio.TimeoutError()

            result = await suggest_meeting_times(
                google_reader, duration_minutes=30, days_ahead=1, config=SchedulingConfig(), now=tuesday
            )

        assert result["success"] is False
        assert "TimeoutError" in result["error"]

    @pytest.mark.asyncio
    async def test_malformed_event_raises_upstream(self, google_reader, tuesday):
        page = {"success": True, "data": {"items": [
            google_item("1", "2026-10-20T09:00:00Z", "2026-10-20T09:30:00Z"),
            google_item("broken", "not-a-timestamp", "2026-10-20T10:30:00Z"),
        ]}}

        with patch.object(google_reader, "_make_request", AsyncMock(return_value=page)):
            result = await google_reader.get_events(tuesday, tuesday + timedelta(days=1))
            with pytest.raises(UpstreamFetchError, match="Malformed event broken"):
                await google_reader.list_busy_intervals(tuesday, tuesday + timedelta(days=1))

        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_missing_token(self, tuesday):
        reader = GoogleCalendarReader(CalendarAccount(id="acct"))

        result = await reader.get_events(tuesday, tuesday + timedelta(days=1))

        assert result == {"success": False, "error": "No access token"}

    @pytest.mark.asyncio
    async def test_expired_token(self, tuesday):
        account = CalendarAccount(
            id="acct",
            access_token="stale",
            token_expiry=datetime.now() - timedelta(minutes=5),
        )

        result = await GoogleCalendarReader(account).get_events(tuesday, tuesday + timedelta(days=1))

        assert result["success"] is False
        assert result["error"] == "Access token expired"

    def test_headers(self, google_reader):
        assert google_reader._get_headers()["Authorization"] == "Bearer token-123"


def test_account_to_dict_excludes_token():
    account = CalendarAccount(id="acct", email_address="me@example.com", access_token="secret")

    assert "secret" not in str(account.to_dict())
    assert account.is_token_expired() is False
