from datetime import date, timedelta


def first_monday_on_or_after(start: date) -> date:
    return start + timedelta(days=(7 - start.weekday()) % 7)


def week_windows(start: date, end: date) -> list[tuple[date, date]]:
    """Split ``[first Monday on/after start, end]`` into 7-day windows.

    The final window is truncated at ``end``. Returns an empty list when the
    first Monday falls after ``end``.
    """
    windows: list[tuple[date, date]] = []
    current = first_monday_on_or_after(start)
    while current <= end:
        window_end = min(current + timedelta(days=6), end)
        windows.append((current, window_end))
        current = window_end + timedelta(days=1)
    return windows


def season_start_date(season: int, month_day: tuple[int, int] = (3, 1)) -> date:
    return date(season, month_day[0], month_day[1])
