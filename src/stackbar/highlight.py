# stackbar/highlight.py
"""
Linked highlighting between chart segments and legend entries.

A single ``HighlightCoordinator`` per chart owns the focus state. Views
subscribe to it and translate each state into styles on their mounted
primitives; handlers never restyle primitives themselves.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .keys import normalize_key
from .render import LegendEntry, SegmentGeometry


@dataclass(frozen=True)
class HighlightState:
    """``key`` is None while unfocused."""

    key: Optional[str] = None

    @property
    def focused(self) -> bool:
        return self.key is not None


UNFOCUSED = HighlightState()

Subscriber = Callable[[HighlightState], None]
SelectListener = Callable[[Dict[str, str]], None]


class HighlightCoordinator:
    """
    Two-state machine: Unfocused <-> FocusedOn(key).

    enter(key)  -> FocusedOn(key); entering another key replaces the focus
    leave()     -> Unfocused, whatever came before
    click(sub)  -> no state change; {"subcategory": sub} sent to listeners
    """

    def __init__(self):
        self.state = UNFOCUSED
        self._subscribers: List[Subscriber] = []
        self._select_listeners: List[SelectListener] = []

    def subscribe(self, fn: Subscriber, replay: bool = True) -> Callable[[], None]:
        """Register a view; with ``replay`` it is called with the current state right away."""
        self._subscribers.append(fn)
        if replay:
            fn(self.state)

        def _unsubscribe():
            if fn in self._subscribers:
                self._subscribers.remove(fn)

        return _unsubscribe

    def on_select(self, fn: SelectListener) -> None:
        self._select_listeners.append(fn)

    def enter(self, datum: str) -> None:
        """Focus the subcategory given either raw or already normalized."""
        self.state = HighlightState(normalize_key(datum))
        self._publish()

    def leave(self) -> None:
        self.state = UNFOCUSED
        self._publish()

    def click(self, subcategory: str) -> None:
        event = {"subcategory": subcategory}
        for fn in list(self._select_listeners):
            fn(event)

    def reset(self) -> None:
        """Drop views and focus, keeping selection listeners."""
        self._subscribers.clear()
        self.state = UNFOCUSED

    def _publish(self) -> None:
        for fn in list(self._subscribers):
            fn(self.state)


# =============================================================================
# EMPHASIS RULES
# =============================================================================

def segment_opacities(
    segments: Sequence[SegmentGeometry],
    state: HighlightState,
    dim_opacity: float,
) -> List[float]:
    if not state.focused:
        return [1.0] * len(segments)
    return [1.0 if seg.key == state.key else dim_opacity for seg in segments]


def legend_backgrounds(
    entries: Sequence[LegendEntry],
    state: HighlightState,
    highlight: str,
    background: str,
) -> List[str]:
    if not state.focused:
        return [background] * len(entries)
    return [highlight if entry.key == state.key else background for entry in entries]


class ChartView:
    """Applies segment opacity on the mount for every state change."""

    def __init__(self, mount, segments: Sequence[SegmentGeometry], dim_opacity: float):
        self.mount = mount
        self.segments = list(segments)
        self.dim_opacity = dim_opacity

    def __call__(self, state: HighlightState) -> None:
        self.mount.apply_segment_opacity(segment_opacities(self.segments, state, self.dim_opacity))


class LegendView:
    """Applies legend entry backgrounds on the mount for every state change."""

    def __init__(self, mount, entries: Sequence[LegendEntry], highlight: str, background: str):
        self.mount = mount
        self.entries = list(entries)
        self.highlight = highlight
        self.background = background

    def __call__(self, state: HighlightState) -> None:
        self.mount.apply_legend_background(
            legend_backgrounds(self.entries, state, self.highlight, self.background)
        )
