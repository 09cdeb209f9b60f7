# roadnet/domain/ids.py


class MonotonicIds:
    """
    Session-unique integer ids for nodes and segments.
    Strictly increasing; never derived from wall-clock time, so two entities
    created in the same instant still get distinct ids.
    """

    def __init__(self, start: int = 1):
        self._next = int(start)

    def next(self) -> int:
        i = self._next
        self._next += 1
        return i

    def bump(self, seen: int) -> None:
        """Make sure future ids are greater than an id that came from outside."""
        if seen >= self._next:
            self._next = int(seen) + 1

    def take(self, n: int) -> list[int]:
        return [self.next() for _ in range(n)]
