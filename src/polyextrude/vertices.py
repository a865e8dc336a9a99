from __future__ import annotations

from .geometry import winding_sum
from .models import Point2D
from .ordered_store import OrderedIdentityStore


class VertexSet(OrderedIdentityStore[Point2D]):
    """Ordered 2D polygon vertices keyed by :class:`VertexId`."""

    def winding_sum(self) -> float:
        return winding_sum([p.as_tuple() for p in self.iter()])

    def is_order_clockwise(self) -> bool:
        """True if the stored order runs clockwise.

        Uses the edge sum ``Σ (x2 − x1)(y2 + y1)`` including the
        last→first edge, whether or not the polygon is closed.  A sum of
        exactly zero counts as counter-clockwise.
        """
        return self.winding_sum() > 0.0

    def is_order_counterclockwise(self) -> bool:
        return not self.is_order_clockwise()
