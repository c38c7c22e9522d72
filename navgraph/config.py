"""Configuration classes for navgraph components."""

from dataclasses import dataclass
from typing import Optional

from navgraph.lib.algorithms.base import TurnKind


@dataclass(frozen=True)
class TurnPolicy:
    """Thresholds (degrees) that map a relative bearing to a turn kind.

    A relative bearing below ``straight_max`` in magnitude is straight, below
    ``slight_max`` a slight turn, below ``turn_max`` a plain turn and anything
    else a sharp turn. Negative bearings turn left, positive ones right.
    """

    straight_max: float = 15.0
    slight_max: float = 30.0
    turn_max: float = 100.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.straight_max <= self.slight_max <= self.turn_max <= 180.0:
            raise ValueError(
                "Turn thresholds must satisfy "
                "0 <= straight_max <= slight_max <= turn_max <= 180, got "
                f"{self.straight_max}, {self.slight_max}, {self.turn_max}"
            )

    def classify(self, relative_bearing: float) -> TurnKind:
        """Return the turn kind for a signed relative bearing in (-180, 180]."""
        magnitude = abs(relative_bearing)
        left = relative_bearing < 0
        if magnitude < self.straight_max:
            return TurnKind.STRAIGHT
        if magnitude < self.slight_max:
            return TurnKind.SLIGHT_LEFT if left else TurnKind.SLIGHT_RIGHT
        if magnitude < self.turn_max:
            return TurnKind.LEFT if left else TurnKind.RIGHT
        return TurnKind.SHARP_LEFT if left else TurnKind.SHARP_RIGHT


@dataclass
class SearchConfig:
    """Defaults for path searches."""

    # Upper bound on settled vertices per search; None means unbounded
    max_iterations: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be a positive integer, got {self.max_iterations}"
            )


# Global configuration instances
TURN_POLICY = TurnPolicy()
SEARCH_CONFIG = SearchConfig()
