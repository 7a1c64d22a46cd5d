"""Per-category summary table used as the regression input.

Each incident contributes one :class:`IncidentRecord`: a grouping category
(the borough) and whether the record satisfies a predicate (the victim race
equals a target value). :func:`aggregate` folds those records into a
:class:`SummaryTable` holding, for every category seen, the number of
incidents and the number of matching incidents.

A record whose category is missing is counted under an explicit unknown
bucket, represented by ``category=None``. Categories without a single
matching record are kept with ``matched_count=0``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from . import config
from .transform import load_clean_incidents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncidentRecord:
    category: Optional[str]
    matches_predicate: bool


@dataclass(frozen=True)
class CategorySummary:
    category: Optional[str]
    total_count: int
    matched_count: int

    def __post_init__(self) -> None:
        if self.total_count < 0 or self.matched_count < 0:
            raise ValueError(f"Counts must be non-negative for category {self.label!r}")
        if self.matched_count > self.total_count:
            raise ValueError(
                f"matched_count ({self.matched_count}) exceeds total_count ({self.total_count}) "
                f"for category {self.label!r}"
            )

    @property
    def is_unknown(self) -> bool:
        return self.category is None

    @property
    def label(self) -> str:
        return config.UNKNOWN_LABEL if self.category is None else self.category


class SummaryTable(Sequence[CategorySummary]):
    """Read-only, ordered collection of :class:`CategorySummary` entries."""

    def __init__(self, entries: Iterable[CategorySummary] = ()) -> None:
        self._entries: Tuple[CategorySummary, ...] = tuple(entries)
        seen = set()
        for entry in self._entries:
            if entry.category in seen:
                raise ValueError(f"Duplicate category in summary table: {entry.label!r}")
            seen.add(entry.category)

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CategorySummary]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SummaryTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"SummaryTable({list(self._entries)!r})"

    def categories(self) -> List[Optional[str]]:
        return [entry.category for entry in self._entries]

    def by_category(self) -> Dict[Optional[str], CategorySummary]:
        return {entry.category: entry for entry in self._entries}

    def total_records(self) -> int:
        return sum(entry.total_count for entry in self._entries)

    def as_pairs(self) -> List[Tuple[int, int]]:
        """Return ``(total_count, matched_count)`` pairs, one per category."""
        return [(entry.total_count, entry.matched_count) for entry in self._entries]

    def expand(self) -> List[IncidentRecord]:
        """Rebuild a record list that aggregates back to this table."""
        records: List[IncidentRecord] = []
        for entry in self._entries:
            records.extend([IncidentRecord(entry.category, True)] * entry.matched_count)
            records.extend(
                [IncidentRecord(entry.category, False)] * (entry.total_count - entry.matched_count)
            )
        return records

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "category": [entry.label for entry in self._entries],
                "is_unknown": [entry.is_unknown for entry in self._entries],
                "total_count": [entry.total_count for entry in self._entries],
                "matched_count": [entry.matched_count for entry in self._entries],
            }
        )


def aggregate(records: Iterable[IncidentRecord]) -> SummaryTable:
    """Count incidents and predicate matches per category.

    Every category starts at zero matches before any match is counted, so a
    category with no matching record still appears with ``matched_count=0``.
    Output order follows the first appearance of each category in ``records``.
    """
    totals: Dict[Optional[str], int] = {}
    matched: Dict[Optional[str], int] = {}
    for record in records:
        if record.category not in totals:
            totals[record.category] = 0
            matched[record.category] = 0
        totals[record.category] += 1
        if record.matches_predicate:
            matched[record.category] += 1

    return SummaryTable(
        CategorySummary(category=category, total_count=total, matched_count=matched[category])
        for category, total in totals.items()
    )


def records_from_frame(
    df: pd.DataFrame,
    *,
    category_column: str = config.CATEGORY_COLUMN,
    predicate_column: str = config.VICTIM_COLUMN,
    target: str = config.DEFAULT_TARGET_VALUE,
) -> List[IncidentRecord]:
    """Build records from a cleaned incident frame.

    Missing categories become ``None``; a missing predicate value never matches.
    ``target`` is compared case-insensitively after stripping, like the
    missing-value sentinels.
    """
    for column in (category_column, predicate_column):
        if column not in df.columns:
            raise ValueError(f"Column {column!r} not found in incident data")

    categories = [None if pd.isna(value) else str(value) for value in df[category_column].tolist()]
    values = df[predicate_column].astype("string").str.strip().str.upper()
    matches = (values == target.strip().upper()).fillna(False).astype(bool)
    return [
        IncidentRecord(category=category, matches_predicate=bool(match))
        for category, match in zip(categories, matches.tolist())
    ]


def aggregate_frame(
    df: pd.DataFrame,
    *,
    category_column: str = config.CATEGORY_COLUMN,
    predicate_column: str = config.VICTIM_COLUMN,
    target: str = config.DEFAULT_TARGET_VALUE,
) -> SummaryTable:
    records = records_from_frame(
        df,
        category_column=category_column,
        predicate_column=predicate_column,
        target=target,
    )
    return aggregate(records)


def build_summary_table(
    clean_path: Path | str | None = None,
    *,
    output_path: Path | str | None = None,
    target: str = config.DEFAULT_TARGET_VALUE,
) -> SummaryTable:
    summary_path = Path(output_path) if output_path else config.DEFAULT_SUMMARY_PATH
    summary_path.parent.mkdir(parents=True, exist_ok=True)

    df = load_clean_incidents(clean_path)
    if df.empty:
        logger.warning("Cleaned dataset is empty. Summary table will be empty.")

    table = aggregate_frame(df, target=target)
    table.to_frame().to_parquet(summary_path, index=False)
    logger.info(
        "Wrote summary table to %s (%s categories, %s records, target=%s)",
        summary_path,
        len(table),
        table.total_records(),
        target,
    )
    return table


__all__ = [
    "CategorySummary",
    "IncidentRecord",
    "SummaryTable",
    "aggregate",
    "aggregate_frame",
    "build_summary_table",
    "records_from_frame",
]
