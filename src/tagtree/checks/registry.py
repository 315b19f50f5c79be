"""Check registry and the @check decorator.

The registry keeps checks in registration order, which is the order their
findings appear in the detector output.

Thread Safety:
CheckRegistry is immutable after creation. Safe to share.
Use CheckRegistryBuilder for mutable construction.

Example:
    >>> registry = CheckRegistryBuilder().register(find_unclosed_tags).build()
    >>> registry.names
    ('unclosed-tags',)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagtree.checks.protocol import Check, CheckContext, Diagnostic

CheckFunc = Callable[["CheckContext"], "Iterable[Diagnostic]"]


def check(name: str) -> Callable[[CheckFunc], Check]:
    """Mark a function as a detector check named ``name``.

    Example:
        @check("no-marquee")
        def find_marquee(ctx: CheckContext) -> Iterator[Diagnostic]:
            if "<marquee" in ctx.markup.lower():
                yield Diagnostic("no-marquee", "Obsolete element: <marquee>")
    """
    if not name:
        msg = "A check name must be provided"
        raise ValueError(msg)

    def decorator(func: CheckFunc) -> Check:
        func.check_name = name  # type: ignore[attr-defined]
        return func  # type: ignore[return-value]

    return decorator


class CheckRegistry:
    """Immutable, ordered collection of checks."""

    __slots__ = ("_checks", "_by_name")

    def __init__(self, checks: tuple[Check, ...]) -> None:
        self._checks = checks
        self._by_name = {c.check_name: c for c in checks}

    def get(self, name: str) -> Check | None:
        return self._by_name.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        """Registered names, in run order."""
        return tuple(c.check_name for c in self._checks)

    def without(self, *names: str) -> CheckRegistry:
        """Copy of this registry minus the named checks."""
        return CheckRegistry(tuple(c for c in self._checks if c.check_name not in names))

    def __iter__(self) -> Iterator[Check]:
        return iter(self._checks)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._checks)


class CheckRegistryBuilder:
    """Mutable builder for CheckRegistry."""

    __slots__ = ("_checks",)

    def __init__(self, checks: Iterable[Check] = ()) -> None:
        self._checks: list[Check] = []
        for c in checks:
            self.register(c)

    def register(self, func: Check) -> CheckRegistryBuilder:
        """Append a check. Returns self for chaining.

        Raises:
            ValueError: If the function isn't decorated with @check, or the
                name is already registered.
        """
        name = getattr(func, "check_name", None)
        if not name:
            msg = f"{func!r} is not a check; decorate it with @check(name)"
            raise ValueError(msg)
        if any(c.check_name == name for c in self._checks):
            msg = f"Check {name!r} is already registered"
            raise ValueError(msg)
        self._checks.append(func)
        return self

    def build(self) -> CheckRegistry:
        return CheckRegistry(tuple(self._checks))
