from collections.abc import Callable
from typing import Any, TypeVar

V = TypeVar("V")


class DerivedValueCache:
    """
    Per-instance memo for values derived from an object's immutable data.

    The first get() for a name runs the computation and stores its result;
    every later get() returns the stored object itself. There is no
    invalidation: drop the owning object to drop its cache.

    Architectural Note:
    -------------------
    Membership in the private dict is the "already computed" flag, so a
    computation that legitimately returns None is still only run once.
    No lock is taken. Two threads racing on the same name may both compute;
    the computations are side-effect free, so this only costs time.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, name: str, compute: Callable[[], V]) -> V:
        """
        Returns the cached value for name, computing it on first access.

        Args:
            name: Key of the derived value (usually the property name)
            compute: Zero-argument callable producing the value

        Returns:
            The stored value
        """
        if name in self._values:
            return self._values[name]  # type: ignore[no-any-return]

        value = compute()
        # setdefault keeps the first stored value if another caller won a race
        return self._values.setdefault(name, value)  # type: ignore[no-any-return]

    def is_cached(self, name: str) -> bool:
        """Returns True if the value for name has already been computed."""
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
