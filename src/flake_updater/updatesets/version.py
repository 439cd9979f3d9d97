"""Date-based version derivation.

Versions are ``YYYY.MM.DD`` for the first update of a day and
``YYYY.MM.DD.N`` (``N >= 2``) for each further update on the same day, so
labels stay strictly increasing as long as the clock does.
"""

from __future__ import annotations

from datetime import date

from .types import VersionLabel


def next_version(today: date, current: VersionLabel, hashes_differ: bool) -> VersionLabel:
    """Return the label the next release should carry.

    When ``hashes_differ`` is false the current label is returned unchanged.
    Otherwise a new day starts unsuffixed, and a repeat on the same day bumps
    the suffix (unsuffixed becomes ``.2``). A ``current`` dated after
    ``today`` is treated as a different day; see :func:`is_backdated`.
    """

    if not hashes_differ:
        return current
    if current.date != today:
        return VersionLabel.for_date(today)
    if current.suffix is None:
        return VersionLabel.for_date(today, 2)
    return VersionLabel.for_date(today, current.suffix + 1)


def is_backdated(today: date, current: VersionLabel) -> bool:
    """True when ``current`` carries a date later than ``today``."""
    return current.date > today
