"""
Quote number sequencing.

Quote numbers look like Q-2026-018: a year-scoped sequence that rolls
over to the next year after 999.
"""
import re

QUOTE_NUMBER_PATTERN = re.compile(r'(Q)-([0-9]{4})-([0-9]+)', re.IGNORECASE)
MAX_SEQUENCE = 999


def next_quote_number(current: str) -> str:
    """
    Get the quote number following `current`.

    Q-2026-018 -> Q-2026-019, Q-2026-999 -> Q-2027-001.
    Anything not in Q-YYYY-NNN form is returned unchanged.
    """
    match = QUOTE_NUMBER_PATTERN.fullmatch(current)
    if not match:
        return current

    prefix = match.group(1).upper()
    year = int(match.group(2))
    seq = int(match.group(3)) + 1

    if seq > MAX_SEQUENCE:
        seq = 1
        year += 1

    return f"{prefix}-{year}-{seq:03d}"
