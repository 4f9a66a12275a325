# stackbar/stack.py
"""Stacked layout: cumulative lower/upper bounds per (category, subcategory)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from ._preprocessing import CategoryIndex


@dataclass(frozen=True)
class StackSegment:
    subcategory: str
    category: Any
    lower: float
    upper: float

    @property
    def value(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class StackLayout:
    """
    Segments in paint order: one series per subcategory (canonical order),
    each series listing the categories in display order.
    """

    segments: Tuple[StackSegment, ...]
    totals: Dict[Any, float]
    max_total: float

    def series(self, subcategory: str) -> List[StackSegment]:
        return [s for s in self.segments if s.subcategory == subcategory]

    def for_category(self, category: Any) -> List[StackSegment]:
        return [s for s in self.segments if s.category == category]


def value_table(df: pd.DataFrame, index: CategoryIndex) -> pd.DataFrame:
    """Category x subcategory value matrix; missing pairs are 0."""
    rows = pd.Index(list(index.categories), dtype=object)
    cols = pd.Index(list(index.subcategories), dtype=object)

    if not len(df) or not len(cols):
        return pd.DataFrame(0.0, index=rows, columns=cols)

    table = df.set_index(["category", "subcategory"])["value"].unstack("subcategory")
    return table.reindex(index=rows, columns=cols).fillna(0.0).astype(float)


def build_stack(df: pd.DataFrame, index: CategoryIndex) -> StackLayout:
    """
    Stack the tidy records along the canonical subcategory order.

    Parameters
    ----------
    df : pd.DataFrame
        Deduplicated records (see ``normalize_records``).
    index : CategoryIndex
        Display order of categories and canonical order of subcategories.

    Returns
    -------
    StackLayout
        Segments with contiguous bounds starting at 0, the per-category
        totals for the displayed categories and the maximum total over
        every category present in the records.
    """
    table = value_table(df, index)

    upper = table.cumsum(axis=1)
    # shifting the running sum keeps neighbouring bounds bit-identical
    lower = upper.shift(1, axis=1, fill_value=0.0)

    upper_arr = upper.to_numpy(dtype=float)
    lower_arr = lower.to_numpy(dtype=float)

    segments = []
    for j, sub in enumerate(index.subcategories):
        for i, cat in enumerate(index.categories):
            segments.append(StackSegment(sub, cat, float(lower_arr[i, j]), float(upper_arr[i, j])))

    if upper_arr.shape[1]:
        totals = dict(zip(index.categories, upper_arr[:, -1].tolist()))
    else:
        totals = {cat: 0.0 for cat in index.categories}

    max_total = 0.0
    if len(df):
        max_total = float(np.max(df.groupby("category", sort=False)["value"].sum().to_numpy()))
    max_total = max(max_total, max(totals.values(), default=0.0), 0.0)

    return StackLayout(segments=tuple(segments), totals=totals, max_total=max_total)
