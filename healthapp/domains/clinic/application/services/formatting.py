"""
Date/time rendering shared by notification messages and CSV reports.

Formats follow the US short/long patterns used by the clinic front desk:
3/7/2025, 9:05 AM, Friday, March 7, 2025 9:05 AM.
"""

from datetime import datetime


def short_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def short_time(value: datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def long_datetime(value: datetime) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year} {short_time(value)}"
