"""Daily calorie statistics derived from the ledger."""

from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from burnfit.domain.ledger import DailyStats, DailySummary, EntryKind, LedgerEntry
from burnfit.services.targets import round_half_up

BURN_SCORE_GOAL_KCAL = 300


def get_today_stats(entries: Iterable[LedgerEntry], now: datetime) -> DailyStats:
    """Return intake and burned totals for the calendar date of ``now``.

    Entry dates are read in ``now``'s timezone; a naive ``now`` means system
    local time. Always recomputed from the full ledger.
    """
    return _aggregate_day(now.date(), entries, now.tzinfo)


def summarize_day(stats: DailyStats, daily_target_kcal: int) -> DailySummary:
    """Combine daily stats with the profile target."""
    if daily_target_kcal <= 0:
        raise ValueError(f"Daily target must be positive, got {daily_target_kcal}")
    net = stats.intake - stats.burned
    progress = round_half_up(stats.intake / daily_target_kcal * 100)
    burn_score = round_half_up(stats.burned / BURN_SCORE_GOAL_KCAL * 100)
    return DailySummary(
        date=stats.date,
        intake=stats.intake,
        burned=stats.burned,
        net=net,
        target=daily_target_kcal,
        remaining=daily_target_kcal - net,
        progress_percent=min(100, progress),
        over_target=stats.intake > daily_target_kcal,
        burn_score=min(100, burn_score),
    )


def entry_date(entry: LedgerEntry, tz: tzinfo | None) -> date:
    """Return the calendar date an entry was logged on in ``tz``."""
    return datetime.fromtimestamp(entry.timestamp_ms / 1000, tz=tz).date()


def _aggregate_day(
    day: date, entries: Iterable[LedgerEntry], tz: tzinfo | None
) -> DailyStats:
    intake = 0
    burned = 0
    for entry in entries:
        if entry_date(entry, tz) != day:
            continue
        if entry.kind == EntryKind.INTAKE:
            intake += entry.calories
        elif entry.kind == EntryKind.EXERCISE:
            burned += entry.calories
    return DailyStats(date=day, intake=intake, burned=burned)
