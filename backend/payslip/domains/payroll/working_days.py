from datetime import date, timedelta

SATURDAY = 5


def count_working_days(start: date, end: date) -> int:
    """Number of Monday-Friday dates in ``[start, end]``, never less than 1."""
    working_days = 0
    current = start
    while current <= end:
        if current.weekday() < SATURDAY:
            working_days += 1
        current += timedelta(days=1)
    # proration divides by this
    return max(working_days, 1)
