"""Analysis result: composite rating plus the notes that explain it."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Analysis:
    """Immutable rating accumulator threaded through the signal rules.

    A negative rating means the security looks overbought (sell), a
    positive rating means it looks oversold (buy). The magnitude is the
    confidence; no bounds are enforced.

    Attributes:
        rating: Composite buy/sell score.
        notes: One entry per fired signal condition, in rule order.
    """

    rating: float = 0.0
    notes: tuple[str, ...] = ()

    def adjust(self, points: float, note: str) -> Analysis:
        """Return a copy with ``points`` added to the rating and ``note`` appended."""
        return replace(self, rating=self.rating + points, notes=(*self.notes, note))

    def dampen(self, divisor: float, note: str) -> Analysis:
        """Return a copy with the rating divided by ``divisor`` (pulled toward 0)."""
        return replace(self, rating=self.rating / divisor, notes=(*self.notes, note))

    def note(self, note: str) -> Analysis:
        """Return a copy with ``note`` appended and the rating unchanged."""
        return replace(self, notes=(*self.notes, note))

    @property
    def has_recommendation(self) -> bool:
        """True when at least one signal fired."""
        return bool(self.notes)
