"""Release Calendar - aggregated release schedules for GitHub, Jira and iCalendar projects."""

__version__ = "0.1.0"
