"""Office Integration — Calendar availability for the productivity assistant

Philosophy:
    Scheduling suggestions should respect how people actually work. Free time
    is only useful if it lands in working hours, leaves room around other
    meetings, and avoids the parts of the day that drain energy.

Design Principles:
    1. Read-Only — The engine never writes to a calendar
    2. Explicit Collaborators — Providers are passed in, never looked up globally
    3. Fail Whole — A request either returns every candidate or raises

Components:
    models.py: Data models (BusyInterval, CandidateSlot, ScoredSlot, CalendarEvent)
    errors.py: InvalidRangeError, UpstreamFetchError
    providers/: Calendar readers (Google Calendar, in-memory)
    calendar/: Availability finder, slot scorer, ranking pipeline, insights
"""
