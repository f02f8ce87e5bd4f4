"""Constraint priorities (solver strengths)."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering


REQUIRED_VALUE = 1000.0
HIGH_VALUE = 750.0
MEDIUM_VALUE = 500.0
LOW_VALUE = 250.0
FITTING_VALUE = 50.0

# Largest strength a non-required priority can be nudged up to
MAX_OPTIONAL_VALUE = REQUIRED_VALUE - 1.0
MIN_VALUE = 1.0

NAMED_PRIORITIES: dict[str, float] = {
    "required": REQUIRED_VALUE,
    "high": HIGH_VALUE,
    "medium": MEDIUM_VALUE,
    "low": LOW_VALUE,
    "fitting": FITTING_VALUE,
}


@total_ordering
@dataclass(frozen=True)
class Priority:
    """Strength of a constraint in the range [1, 1000].

    ``Priority.required()`` is unbreakable and strictly greater than every
    other priority. Lower tiers are plain values, so two independently created
    ``Priority.high()`` compare equal. Use ``+``/``-`` with a number to nudge a
    priority within its tier; an optional priority never reaches required.

    Example:
        >>> Priority.high() + 1 > Priority.high()
        True
        >>> (Priority.high() + 500).is_required
        False
    """

    value: float

    def __post_init__(self) -> None:
        if not MIN_VALUE <= self.value <= REQUIRED_VALUE:
            raise ValueError(
                f"Priority must be within [{MIN_VALUE:g}, {REQUIRED_VALUE:g}], got {self.value!r}"
            )

    @classmethod
    def required(cls) -> Priority:
        return cls(REQUIRED_VALUE)

    @classmethod
    def high(cls) -> Priority:
        return cls(HIGH_VALUE)

    @classmethod
    def medium(cls) -> Priority:
        return cls(MEDIUM_VALUE)

    @classmethod
    def low(cls) -> Priority:
        return cls(LOW_VALUE)

    @classmethod
    def fitting(cls) -> Priority:
        return cls(FITTING_VALUE)

    @classmethod
    def parse(cls, spec: Priority | str | float | int) -> Priority:
        """Convert a name ("high", "low+1") or a number to a Priority.

        Args:
            spec: Priority, tier name with an optional ``+n``/``-n`` suffix, or number

        Returns:
            The corresponding Priority

        Raises:
            ValueError: If the name is unknown or the number is out of range
        """
        if isinstance(spec, Priority):
            return spec
        if isinstance(spec, (int, float)):
            return cls(float(spec))

        text = str(spec).strip().lower()
        delta = 0.0
        for sign in ("+", "-"):
            name, sep, amount = text.partition(sign)
            if sep:
                try:
                    delta = float(amount) if sign == "+" else -float(amount)
                except ValueError:
                    raise ValueError(f"Invalid priority offset in {spec!r}") from None
                text = name.strip()
                break

        if text not in NAMED_PRIORITIES:
            raise ValueError(
                f"Unknown priority {spec!r}, expected one of {sorted(NAMED_PRIORITIES)}"
            )
        return cls(NAMED_PRIORITIES[text]) + delta

    @property
    def is_required(self) -> bool:
        return self.value >= REQUIRED_VALUE

    def __add__(self, delta: float) -> Priority:
        if not isinstance(delta, (int, float)):
            return NotImplemented
        ceiling = REQUIRED_VALUE if self.is_required else MAX_OPTIONAL_VALUE
        return Priority(min(max(self.value + delta, MIN_VALUE), ceiling))

    def __sub__(self, delta: float) -> Priority:
        if not isinstance(delta, (int, float)):
            return NotImplemented
        return self + (-delta)

    def __lt__(self, other: Priority) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value < other.value

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        for name, value in NAMED_PRIORITIES.items():
            if value == self.value:
                return f"Priority.{name}()"
        return f"Priority({self.value:g})"
