"""Cycle detection for $ref chains."""

from collections.abc import Iterable, Iterator, Mapping


class CycleGuard:
    """Set of canonical identities already entered during one resolution call.

    The same guard is threaded through every recursive step of a call and returned
    with the result, so callers resolving sibling nodes of one larger object can pass
    it back in to keep extending it. Independent calls must not share a guard unless
    the caller wants that on purpose.
    """

    def __init__(self, identities: Iterable[str] = ()):
        if isinstance(identities, Mapping):
            identities = [identity for identity, present in identities.items() if present]
        self._visited: dict[str, bool] = dict.fromkeys(identities, True)

    @classmethod
    def coerce(cls, visited: "CycleGuard | Iterable[str] | None") -> "CycleGuard":
        """Return visited itself if it is a guard, otherwise a new guard seeded from it."""
        if isinstance(visited, cls):
            return visited
        return cls(visited or ())

    def enter(self, identity: str) -> bool:
        """Mark identity as visited.

        Returns:
            False if the identity had already been entered, True otherwise
        """
        if identity in self._visited:
            return False
        self._visited[identity] = True
        return True

    def branch(self) -> "CycleGuard":
        """Create an independent copy; marks added to the copy don't affect this guard."""
        return CycleGuard(self._visited)

    @property
    def identities(self) -> frozenset[str]:
        return frozenset(self._visited)

    def as_dict(self) -> dict[str, bool]:
        return dict(self._visited)

    def __contains__(self, identity: object) -> bool:
        return identity in self._visited

    def __iter__(self) -> Iterator[str]:
        return iter(self._visited)

    def __len__(self) -> int:
        return len(self._visited)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CycleGuard):
            return NotImplemented
        return self._visited.keys() == other._visited.keys()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CycleGuard({sorted(self._visited)!r})"
