from budgie.charts.templates import (
    category_breakdown_chart,
    ring_segments,
    summary_ring_chart,
)

__all__ = [
    "category_breakdown_chart",
    "ring_segments",
    "summary_ring_chart",
]
