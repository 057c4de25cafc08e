"""Renderers that turn data into styled terminal lines.

Every renderer takes an explicit :class:`StylerContext`; nothing here reads
process-wide state.
"""

from __future__ import annotations

from .banner import BannerRenderer
from .box import BoxOptions, BoxRenderer
from .chart import ChartDatum, ChartRenderer
from .context import StylerContext
from .progress import ProgressBar
from .spinner import Spinner
from .table import TableColumn, TableOptions, TableRenderResult, TableRenderer

__all__ = [
    "BannerRenderer",
    "BoxOptions",
    "BoxRenderer",
    "ChartDatum",
    "ChartRenderer",
    "ProgressBar",
    "Spinner",
    "StylerContext",
    "TableColumn",
    "TableOptions",
    "TableRenderResult",
    "TableRenderer",
]
