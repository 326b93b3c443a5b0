"""
Domain service: append-only log history of tagged subjects.

Log entries are never edited. The current state of a subject is its
entry with the latest ``updatedAt``; updates are new entries that carry
over every field the user did not touch.
"""
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel

from agritag.domain.models import (
    AnimalDocument,
    AnimalLogEntry,
    TreeDocument,
    TreeLogEntry,
)
from agritag.utils.calendar import add_months, parse_timestamp

Entry = TypeVar("Entry", TreeLogEntry, AnimalLogEntry)

DEFAULT_HEALTH_STATUS = "Healthy"
DEFAULT_GENDER = "Jantan"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _recency_key(entry: Union[TreeLogEntry, AnimalLogEntry]) -> tuple[bool, datetime, str]:
    # Unparseable timestamps rank below every parseable one
    parsed = parse_timestamp(entry.updated_at)
    return (parsed is not None, parsed or _EPOCH, entry.updated_at or "")


def sort_newest_first(entries: Iterable[Entry]) -> list[Entry]:
    """Return the entries ordered from most to least recent."""
    return sorted(entries, key=_recency_key, reverse=True)


def latest_entry(entries: Iterable[Entry]) -> Optional[Entry]:
    """
    Pick the current state of a subject.

    Timestamps are compared as instants, so entries written with different
    precision or offsets still order correctly.

    Returns:
        The most recent entry, or None for an empty history
    """
    return max(entries, key=_recency_key, default=None)


def latest_per_subject(
    documents: Iterable[Union[TreeDocument, AnimalDocument]],
) -> list:
    """Latest entry of every subject that has at least one log."""
    latest = []
    for document in documents:
        entry = latest_entry(document.logs)
        if entry is not None:
            latest.append(entry)
    return latest


def activity_summary(
    entries: Sequence[Union[TreeLogEntry, AnimalLogEntry]],
    now: Optional[datetime] = None,
) -> dict[str, int]:
    """
    Count subjects updated within the last calendar month.

    Args:
        entries: Latest entry of each subject
        now: Reference instant (defaults to the current UTC time)

    Returns:
        {"active": n, "inactive": m}
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff_date = add_months(now.date(), -1)
    cutoff = datetime.combine(cutoff_date, now.timetz())

    active = 0
    for entry in entries:
        updated = parse_timestamp(entry.updated_at)
        if updated is not None and updated >= cutoff:
            active += 1

    return {"active": active, "inactive": len(entries) - active}


def logs_per_day(
    entries: Iterable[Union[TreeLogEntry, AnimalLogEntry]],
) -> dict[str, int]:
    """Number of log entries per UTC day, keyed by ISO date in ascending order."""
    counts = Counter()
    for entry in entries:
        updated = parse_timestamp(entry.updated_at)
        if updated is not None:
            counts[updated.date().isoformat()] += 1
    return {day: counts[day] for day in sorted(counts)}


def now_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _carry_over(update: BaseModel, latest: Optional[BaseModel], names: Iterable[str]) -> dict:
    values = {}
    for name in names:
        value = getattr(update, name)
        if value is None and latest is not None:
            value = getattr(latest, name)
        values[name] = value
    return values


def merge_tree_update(
    tag_id: str,
    update: BaseModel,
    latest: Optional[TreeLogEntry],
    now: Optional[datetime] = None,
) -> TreeLogEntry:
    """
    Build the next log entry of a tree.

    Every field left as None in ``update`` keeps the value of ``latest``.

    Args:
        tag_id: Raw tag identifier of the tree
        update: Partial update with the same field names as TreeLogEntry
        latest: Current state of the tree, if it has any history
        now: Timestamp of the new entry

    Returns:
        A new TreeLogEntry
    """
    values = _carry_over(update, latest, (
        "remark",
        "type",
        "age",
        "fertilization_date",
        "pesticide_date",
        "watering_date",
        "location",
    ))
    return TreeLogEntry(id=tag_id, updated_at=now_timestamp(now), **values)


def merge_animal_update(
    tag_id: str,
    update: BaseModel,
    latest: Optional[AnimalLogEntry],
    species_name: str,
    now: Optional[datetime] = None,
) -> AnimalLogEntry:
    """
    Build the next log entry of an animal.

    The animal type always comes from the decoded tag. Health status and
    gender default to "Healthy" and "Jantan" for a first record.
    """
    values = _carry_over(update, latest, (
        "gender",
        "birth_date",
        "weight",
        "vaccination_date",
        "production",
        "location",
    ))
    health_status = latest.health_status if latest and latest.health_status else DEFAULT_HEALTH_STATUS

    return AnimalLogEntry(
        id=tag_id,
        type=species_name,
        health_status=health_status,
        gender=values.pop("gender") or DEFAULT_GENDER,
        weight=values.pop("weight") or 0,
        production=values.pop("production") or 0,
        updated_at=now_timestamp(now),
        **values,
    )
