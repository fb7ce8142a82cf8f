"""
Per-render-pass state of a page.
"""

from dataclasses import dataclass


@dataclass
class RenderContext:
    """
    State threaded through one page render.

    Attributes:
        widget_used: Set when a filter widget is placed on the page; assets
            are only emitted when this is True at finalization
    """

    widget_used: bool = False
