"""Office Calendar Tools — Find and rank meeting slots

Components:
    intervals.py: Half-open overlap tests
    availability.py: Free-slot enumeration under working hours and weekends
    scoring.py: Productivity score and reasons per slot
    scheduler.py: Ranking pipeline, tool-style helpers, and CLI
    insights.py: Meeting load analysis over recent history
    analytics.py: Weekly and monthly meeting reports
    schemas.py: Request validation at the engine boundary
"""
