# stackbar/scales.py
"""
Band, linear and ordinal color scales for stacked bar charts.

Scales are rebuilt from the current layout on every render and hold no
reference to previous data.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from .config import ChartConfig
from ._preprocessing import CategoryIndex
from .stack import StackLayout


class BandScale:
    """
    Map discrete categories to evenly spaced bands.

    ``padding`` is used for both the gaps between bands and the outer
    gaps; bands are centred in the range.
    """

    def __init__(
        self,
        domain: Sequence[Hashable],
        range: Tuple[float, float] = (0.0, 1.0),
        padding: float = 0.0,
        align: float = 0.5,
    ):
        self.domain = tuple(domain)
        self.range = (float(range[0]), float(range[1]))
        self.padding = padding

        r0, r1 = self.range
        n = len(self.domain)
        self.step = (r1 - r0) / max(1, n - padding + padding * 2)
        start = r0 + (r1 - r0 - self.step * (n - padding)) * align
        self.bandwidth = self.step * (1 - padding)
        self._starts = {d: start + self.step * i for i, d in enumerate(self.domain)}

    def __call__(self, category: Hashable) -> Optional[float]:
        """Start of the band for ``category``; None when not in the domain."""
        return self._starts.get(category)

    def center(self, category: Hashable) -> Optional[float]:
        start = self(category)
        return None if start is None else start + self.bandwidth / 2


class LinearScale:
    """Linear map from a value domain to a pixel range.

    A zero-width domain maps every value to the start of the range, which
    for the inverted magnitude axis is the bottom of the plot.
    """

    def __init__(self, domain: Tuple[float, float] = (0.0, 1.0), range: Tuple[float, float] = (0.0, 1.0)):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    @property
    def is_degenerate(self) -> bool:
        return self.domain[1] == self.domain[0]

    def __call__(self, value: float) -> float:
        (d0, d1), (r0, r1) = self.domain, self.range
        if self.is_degenerate:
            return r0
        t = (float(value) - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        (d0, d1), (r0, r1) = self.domain, self.range
        if self.is_degenerate or r1 == r0:
            return d0
        t = (float(pixel) - r0) / (r1 - r0)
        return d0 + t * (d1 - d0)

    def ticks(self, count: int = 10) -> List[float]:
        """Round tick values (1, 2 or 5 times a power of ten) inside the domain."""
        lo, hi = sorted(self.domain)
        if self.is_degenerate or count <= 0:
            return [lo]

        raw = (hi - lo) / count
        power = math.floor(math.log10(raw))
        error = raw / 10 ** power
        if error >= math.sqrt(50):
            factor = 10
        elif error >= math.sqrt(10):
            factor = 5
        elif error >= math.sqrt(2):
            factor = 2
        else:
            factor = 1
        inc = factor * 10 ** power

        first, last = math.ceil(lo / inc), math.floor(hi / inc)
        return [round(i * inc, 12) for i in range(first, last + 1)]


class ColorScale:
    """
    Ordinal subcategory -> color lookup.

    Colors follow the domain order and cycle through the palette. A key
    outside the domain is appended on first lookup so it keeps a stable
    color for the lifetime of the scale.
    """

    def __init__(self, domain: Sequence[Hashable], palette: Sequence[str]):
        if not palette:
            raise ValueError("palette must contain at least one color")
        self.palette = list(palette)
        self._positions: Dict[Hashable, int] = {}
        for key in domain:
            self._positions.setdefault(key, len(self._positions))

    @property
    def domain(self) -> Tuple[Hashable, ...]:
        return tuple(self._positions)

    def __call__(self, key: Hashable) -> str:
        if key not in self._positions:
            self._positions[key] = len(self._positions)
        return self.palette[self._positions[key] % len(self.palette)]

    def mapping(self) -> Dict[Hashable, str]:
        return {key: self(key) for key in self.domain}


@dataclass(frozen=True)
class Scales:
    x: BandScale
    y: LinearScale
    color: ColorScale


def build_scales(layout: StackLayout, index: CategoryIndex, config: ChartConfig) -> Scales:
    """Positional, magnitude and color scales for the current data."""
    x = BandScale(index.categories, range=(0.0, config.drawing_width), padding=config.padding)
    y = LinearScale(domain=(0.0, max(layout.max_total, 0.0)), range=(config.drawing_height, 0.0))
    color = ColorScale(index.subcategories, config.palette)
    return Scales(x=x, y=y, color=color)
