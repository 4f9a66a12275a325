# stackbar/logger.py

import time
import pandas as pd
from typing import Dict, Callable, Optional


class ChartLogger:
    """Simple logger for tracking chart renders and interaction."""

    def __init__(self, verbose: int = 1):
        """
        Initialize logger.

        Parameters
        ----------
        verbose : int
            0 = silent, 1 = basic, 2 = detailed (includes hover events)
        """
        self.verbose = verbose
        self._render_times = []
        self._start_times = {}
        self.selections = []

    # ========================================
    # Render Methods
    # ========================================

    def render_start(self, num_records: int, num_categories: int, num_subcategories: int):
        """Log render start."""
        if self.verbose >= 1:
            print(f"\n{'='*60}")
            print(f"Stacked bar render")
            print(f"Records: {num_records} | Categories: {num_categories} | Subcategories: {num_subcategories}")
        self._start_times["render"] = time.time()

    def render_complete(self, num_segments: int, max_total: float):
        """Log render completion."""
        if "render" in self._start_times:
            elapsed = time.time() - self._start_times.pop("render")
            self._render_times.append({"segments": num_segments, "max_total": max_total, "elapsed_s": elapsed})
            if self.verbose >= 1:
                print(f"Segments: {num_segments} | Max total: {max_total:g}")
                print(f"✓ Rendered in {elapsed:.4f}s")
                print(f"{'='*60}\n")

    # ========================================
    # Interaction Methods
    # ========================================

    def highlight(self, key: Optional[str]):
        """Log a focus change."""
        if self.verbose >= 2:
            print(f"  focus → {key}" if key is not None else "  focus cleared")

    def select(self, event: Dict[str, str]):
        """Log a click selection."""
        self.selections.append(event["subcategory"])
        if self.verbose >= 1:
            print(f"clicked {event['subcategory']}")

    def warning(self, name: str, message: str):
        """Log warning."""
        if self.verbose >= 1:
            print(f"⚠️  {name}: {message}")

    # ========================================
    # Summary Methods
    # ========================================

    def get_summary_df(self) -> pd.DataFrame:
        """Get render time summary as DataFrame."""
        if not self._render_times:
            return pd.DataFrame(columns=["render", "segments", "max_total", "elapsed_s"])

        df = pd.DataFrame(self._render_times)
        df.insert(0, "render", range(1, len(df) + 1))
        return df


# ========================================
# Helper Functions
# ========================================

def get_chart_callbacks(logger: ChartLogger) -> Dict[str, Callable]:
    """
    Create callbacks for StackedBarChart.

    Parameters
    ----------
    logger : ChartLogger
        The logger instance to use

    Returns
    -------
    dict
        Dictionary of callback functions

    Examples
    --------
    >>> logger = ChartLogger(verbose=2)
    >>> callbacks = get_chart_callbacks(logger)
    >>> chart = StackedBarChart(records, categories, callbacks=callbacks)
    """
    return {
        'on_render_start': logger.render_start,
        'on_render_complete': logger.render_complete,
        'on_highlight': logger.highlight,
        'on_select': logger.select,
        'on_warning': logger.warning,
    }
