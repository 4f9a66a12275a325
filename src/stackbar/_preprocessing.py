# stackbar/_preprocessing.py
"""
Record normalization and category indexing for stackbar charts.

Every downstream step works on a tidy frame with the columns
``category``, ``subcategory`` and ``value``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

RECORD_COLUMNS = ["category", "subcategory", "value"]


@dataclass(frozen=True)
class Record:
    category: str
    subcategory: str
    value: float


@dataclass(frozen=True)
class CategoryIndex:
    """Canonical ordering used by the stack, the scales and the legend."""

    categories: Tuple[Any, ...]
    subcategories: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.subcategories


Records = Union[pd.DataFrame, Iterable[Union[Record, Mapping[str, Any]]]]


# =============================================================================
# RECORD NORMALIZATION
# =============================================================================

def to_frame(records: Records) -> pd.DataFrame:
    """Coerce records (frame, Record objects or mappings) into a tidy frame."""
    if isinstance(records, pd.DataFrame):
        missing = [c for c in RECORD_COLUMNS if c not in records.columns]
        if missing:
            raise ValueError(f"Records frame is missing columns {missing}.")
        df = records[RECORD_COLUMNS].copy()
    else:
        rows = []
        for i, rec in enumerate(records):
            if isinstance(rec, Record):
                rows.append({"category": rec.category, "subcategory": rec.subcategory, "value": rec.value})
            elif isinstance(rec, Mapping):
                missing = [c for c in RECORD_COLUMNS if c not in rec]
                if missing:
                    raise ValueError(f"Record {i} is missing fields {missing}.")
                rows.append({c: rec[c] for c in RECORD_COLUMNS})
            else:
                raise ValueError(f"Record {i} must be a Record or a mapping, got {type(rec).__name__}.")
        df = pd.DataFrame(rows, columns=RECORD_COLUMNS)

    if len(df) and not pd.api.types.is_numeric_dtype(df["value"]):
        try:
            df["value"] = pd.to_numeric(df["value"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Record values must be numeric: {exc}") from exc

    df["value"] = df["value"].astype(float)
    return df.reset_index(drop=True)


def normalize_records(records: Records) -> Tuple[pd.DataFrame, List[str]]:
    """
    Build the tidy frame and collect data warnings.

    Duplicated (category, subcategory) pairs keep their first record.
    Negative values are reported but passed through.

    Returns
    -------
    (pd.DataFrame, list of str)
        The deduplicated frame and human-readable warnings.
    """
    df = to_frame(records)
    messages: List[str] = []

    dup_mask = df.duplicated(["category", "subcategory"], keep="first")
    if dup_mask.any():
        pairs = df.loc[dup_mask, ["category", "subcategory"]].drop_duplicates()
        listed = ", ".join(f"({c}, {s})" for c, s in pairs.itertuples(index=False))
        messages.append(f"Duplicate records for {listed}; keeping the first of each.")
        df = df.loc[~dup_mask].reset_index(drop=True)

    negative = df["value"] < 0
    if negative.any():
        messages.append(
            f"{int(negative.sum())} record(s) have negative values; stacking is undefined for them."
        )

    return df, messages


# =============================================================================
# CATEGORY INDEX
# =============================================================================

def build_category_index(
    df: pd.DataFrame,
    categories: Optional[Sequence[Any]] = None,
) -> CategoryIndex:
    """
    Derive the canonical orders from the tidy frame.

    Subcategories keep their first-seen order. Categories come from the
    caller; without a list, first-seen order is used.
    """
    subcategories = tuple(pd.unique(df["subcategory"]).tolist()) if len(df) else ()

    if categories is None:
        categories = pd.unique(df["category"]).tolist() if len(df) else []
    else:
        # repeated labels would collide on the band scale
        categories = list(dict.fromkeys(categories))

    return CategoryIndex(categories=tuple(categories), subcategories=subcategories)


def group_records(df: pd.DataFrame) -> Dict[Any, List[Record]]:
    """Group tidy records by category, preserving input order within groups."""
    grouped: Dict[Any, List[Record]] = {}
    for cat, sub, val in df[RECORD_COLUMNS].itertuples(index=False):
        grouped.setdefault(cat, []).append(Record(cat, sub, val))
    return grouped


def unindexed_categories(df: pd.DataFrame, index: CategoryIndex) -> List[Any]:
    """Categories present in records but missing from the display order."""
    known = set(index.categories)
    return [c for c in pd.unique(df["category"]).tolist() if c not in known] if len(df) else []
