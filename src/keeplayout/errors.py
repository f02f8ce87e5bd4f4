"""Exceptions raised while building and solving keep relationships."""


class KeepLayoutError(Exception):
    """Base class for all layout errors."""


class DisconnectedHierarchyError(KeepLayoutError, ValueError):
    """Two views that must be related do not share a common ancestor."""

    def __init__(self, first, second) -> None:
        super().__init__(
            f"Views {first!r} and {second!r} are not in the same hierarchy"
        )
        self.first = first
        self.second = second


class MissingTargetError(KeepLayoutError, ValueError):
    """A relationship needs a second view (or a superview) that is missing."""


class UnsatisfiableConstraintsError(KeepLayoutError, RuntimeError):
    """The required constraints of a hierarchy contradict each other."""
