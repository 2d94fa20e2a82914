# SPDX-License-Identifier: MIT

from typing import cast

import pendulum


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local_date_str() -> str:
    """Today's calendar date in the local timezone as 'YYYY-MM-DD'."""
    return now_local().format("YYYY-MM-DD")


def date_from_str(date_str: str) -> pendulum.Date:
    return cast(pendulum.DateTime, pendulum.parse(date_str, tz="local")).date()


def date_str_to_display(date_str: str) -> str:
    """Render a stored 'YYYY-MM-DD' string as 'YYYY-MM-DD ddd'.

    Stored dates that fail to parse are shown as-is.
    """
    try:
        return date_from_str(date_str).format("YYYY-MM-DD ddd")
    except ValueError:
        return date_str


def date_age_for_humans(date_str: str) -> str:
    try:
        date = date_from_str(date_str)
    except ValueError:
        return ""
    today = pendulum.today("local").date()
    if date == today:
        return "today"
    return today.diff_for_humans(date, absolute=True)
