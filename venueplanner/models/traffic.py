"""
Traffic model: per-corridor load accumulator.

Loads are non-negative integers counting people. Every corridor that has
never been updated implicitly carries zero traffic.
"""

import os
from typing import Dict, Iterator, List, Optional, Tuple

from .corridor import Corridor
from .exceptions import InvalidArgumentError, InvalidTrafficError


def _require_corridor(corridor: Corridor) -> Corridor:
    if corridor is None:
        raise InvalidArgumentError("corridor is None")
    if not isinstance(corridor, Corridor):
        raise InvalidArgumentError(f"expected a Corridor, got {type(corridor).__name__}")
    return corridor


def _require_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidArgumentError(f"traffic amount must be an integer, got {amount!r}")
    return amount


class Traffic:
    """
    A mutable record of the traffic on corridors.

    Traffic never owns a corridor; it only indexes loads by it. Mutation
    is validated eagerly: an update that would leave any corridor with a
    negative load is rejected and leaves the record untouched.
    """

    def __init__(self, initial: Optional['Traffic'] = None):
        """
        Create an empty traffic record, or a deep copy of ``initial``.

        Args:
            initial: Traffic to copy. Later changes to either object do
                not affect the other.
        """
        self._loads: Dict[Corridor, int] = {}
        if initial is not None:
            if not isinstance(initial, Traffic):
                raise InvalidArgumentError("initial traffic must be a Traffic")
            self._loads = dict(initial._loads)

    # ==================== Queries ====================

    def get_traffic(self, corridor: Corridor) -> int:
        """Return the load on a corridor (0 if never updated)."""
        return self._loads.get(_require_corridor(corridor), 0)

    def get_corridors_with_traffic(self) -> List[Corridor]:
        """Corridors with a load greater than zero, in natural order."""
        return sorted(c for c, load in self._loads.items() if load > 0)

    def items(self) -> List[Tuple[Corridor, int]]:
        """(corridor, load) pairs with load > 0, in corridor order."""
        return [(c, self._loads[c]) for c in self.get_corridors_with_traffic()]

    def is_safe(self) -> bool:
        """True if no corridor carries more than its capacity."""
        return all(load <= corridor.capacity for corridor, load in self._loads.items())

    def overloaded_corridors(self) -> List[Corridor]:
        """Corridors whose load exceeds capacity, in natural order."""
        return sorted(c for c, load in self._loads.items() if load > c.capacity)

    def same_traffic(self, other: 'Traffic') -> bool:
        """
        True if both records carry the same load on every corridor.

        The comparison runs over the union of both records' corridors, so
        it is symmetric, and a stored zero matches an absent corridor.
        """
        if other is None:
            raise InvalidArgumentError("other traffic is None")
        for corridor in set(self._loads) | set(other._loads):
            if self._loads.get(corridor, 0) != other._loads.get(corridor, 0):
                return False
        return True

    # ==================== Mutation ====================

    def update_traffic(self, corridor: Corridor, amount: int) -> None:
        """
        Add ``amount`` (which may be negative) to the load on ``corridor``.

        Raises:
            InvalidArgumentError: if corridor is None or amount is not an int
            InvalidTrafficError: if the resulting load would be negative
        """
        _require_corridor(corridor)
        _require_amount(amount)
        total = self._loads.get(corridor, 0) + amount
        if total < 0:
            raise InvalidTrafficError(
                f"traffic on {corridor} cannot drop below zero "
                f"(current {self._loads.get(corridor, 0)}, change {amount})"
            )
        self._loads[corridor] = total

    def add_traffic(self, extra: 'Traffic') -> None:
        """
        Add all traffic recorded by ``extra`` to this record.

        The batch is atomic: every resulting load is checked before any is
        written, so a failing corridor leaves this record unchanged.
        ``extra`` is never modified, even when it is this same object.

        Raises:
            InvalidArgumentError: if extra is None
            InvalidTrafficError: if any corridor would go negative
        """
        if extra is None:
            raise InvalidArgumentError("extra traffic is None")

        pending: Dict[Corridor, int] = {}
        for corridor, amount in list(extra._loads.items()):
            total = pending.get(corridor, self._loads.get(corridor, 0)) + amount
            if total < 0:
                raise InvalidTrafficError(
                    f"traffic on {corridor} cannot drop below zero "
                    f"(current {self._loads.get(corridor, 0)}, change {amount})"
                )
            pending[corridor] = total
        self._loads.update(pending)

    def negated(self) -> 'Traffic':
        """
        Return a delta that removes this traffic when added.

        The result holds negative loads. It is only meant to be passed to
        ``add_traffic`` and fails ``check_invariant``.
        """
        delta = Traffic()
        delta._loads = {corridor: -load for corridor, load in self._loads.items()}
        return delta

    def copy(self) -> 'Traffic':
        """Return an independent deep copy."""
        return Traffic(self)

    # ==================== Protocols ====================

    def __iter__(self) -> Iterator[Corridor]:
        return iter(self.get_corridors_with_traffic())

    def __len__(self) -> int:
        return sum(1 for load in self._loads.values() if load > 0)

    def __bool__(self) -> bool:
        return any(load > 0 for load in self._loads.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Traffic):
            return NotImplemented
        return self.same_traffic(other)

    # Mutable record
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(
            f"{corridor}: {load}{os.linesep}" for corridor, load in self.items()
        )

    def __repr__(self) -> str:
        loads = ", ".join(f"{corridor}: {load}" for corridor, load in self.items())
        return f"Traffic({{{loads}}})"

    def check_invariant(self) -> bool:
        """Return True if the record is internally consistent (testing aid)."""
        if self._loads is None:
            return False
        for corridor, load in self._loads.items():
            if corridor is None or not isinstance(corridor, Corridor) or load < 0:
                return False
        return True
