"""
Merge policies, one per collection.

Pure functions: each takes the current collection and returns a new one.
They never touch storage, so they can be tested on plain lists.

* Sessions: upsert by ``id``; new sessions go first.
* Meals: append within the day; days kept most-recent-first.
* Weights: replace-by-date; the latest measurement for a date wins.
"""

import datetime

from app.schemas.meal import DayMealRecord, MealEntry
from app.schemas.training_session import TrainingSession
from app.schemas.weight import WeightEntry


# ======================================================================
# Sessions
# ======================================================================


def upsert_session(sessions: list[TrainingSession], session: TrainingSession) -> list[TrainingSession]:
    """Replace the session sharing ``session.id`` in place, or prepend it."""
    for i, existing in enumerate(sessions):
        if existing.id == session.id:
            return sessions[:i] + [session] + sessions[i + 1:]
    return [session] + sessions


# ======================================================================
# Meals
# ======================================================================


def add_meal_entry(records: list[DayMealRecord], day: datetime.date, entry: MealEntry) -> list[DayMealRecord]:
    """Append *entry* to the record for *day*, creating it if needed."""
    for i, record in enumerate(records):
        if record.date == day:
            updated = record.model_copy(update={"entries": record.entries + [entry]})
            return records[:i] + [updated] + records[i + 1:]

    new_record = DayMealRecord(date=day, entries=[entry])
    # Keep most-recent-date-first
    position = next((i for i, r in enumerate(records) if r.date < day), len(records))
    return records[:position] + [new_record] + records[position:]


def update_meal_entry(records: list[DayMealRecord], day: datetime.date, entry: MealEntry) -> list[DayMealRecord]:
    """Replace the entry with ``entry.id`` inside the record for *day*.

    Unknown days or ids leave the collection unchanged.
    """
    result = []
    for record in records:
        if record.date == day:
            record = record.model_copy(
                update={"entries": [entry if e.id == entry.id else e for e in record.entries]})
        result.append(record)
    return result


def remove_meal_entry(records: list[DayMealRecord], day: datetime.date, entry_id: str) -> list[DayMealRecord]:
    """Drop the entry ``(day, entry_id)``.  The day record itself is kept."""
    result = []
    for record in records:
        if record.date == day:
            record = record.model_copy(update={"entries": [e for e in record.entries if e.id != entry_id]})
        result.append(record)
    return result


# ======================================================================
# Weights
# ======================================================================


def replace_weight_by_date(weights: list[WeightEntry], entry: WeightEntry) -> list[WeightEntry]:
    """Drop any entry for ``entry.date`` and prepend *entry*."""
    return [entry] + [w for w in weights if w.date != entry.date]
