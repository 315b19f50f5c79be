"""Error detector: runs every registered check over one document.

Findings are reported, never raised. Checks run in registry order and their
outputs are concatenated without deduplication; overlapping reports from
different checks are expected.

Example:
    >>> detect("<div>")
    ['Unclosed tag: <div>', 'Unescaped special character: <', ...]

    >>> from tagtree.checks import NestingRules
    >>> detector = Detector(nesting_rules=NestingRules.html())
    >>> [str(d) for d in detector.run("<p><div></div></p>") if d.check == "incorrect-nesting"]
    ['Incorrect nesting: <p> contains <div>']

Thread Safety:
A Detector holds only immutable configuration and builds a fresh
CheckContext per run. Safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable

from tagtree.checks import DEFAULT_CHECKS, Check, CheckContext, CheckRegistry, Diagnostic
from tagtree.checks.nesting import NestingRules
from tagtree.config import get_parse_config
from tagtree.tags import VALID_TAGS
from tagtree.utils.logger import get_logger

logger = get_logger(__name__)


class Detector:
    """Configurable set of checks.

    Args:
        checks: Registry or iterable of checks to run (default: all built-ins)
        valid_tags: Element names the invalid-tag check accepts
        nesting_rules: Rule table for the nesting check (default: accept all)

    """

    __slots__ = ("_checks", "_valid_tags", "_nesting_rules")

    def __init__(
        self,
        checks: CheckRegistry | Iterable[Check] | None = None,
        *,
        valid_tags: Iterable[str] = VALID_TAGS,
        nesting_rules: NestingRules | None = None,
    ) -> None:
        if checks is None:
            checks = DEFAULT_CHECKS
        self._checks: tuple[Check, ...] = tuple(checks)
        self._valid_tags = frozenset(t.lower() for t in valid_tags)
        self._nesting_rules = nesting_rules if nesting_rules is not None else NestingRules()

    @property
    def check_names(self) -> tuple[str, ...]:
        return tuple(c.check_name for c in self._checks)

    def run(self, markup: str) -> list[Diagnostic]:
        """Run all checks and return their findings in order.

        A check that raises is logged and reported as a finding of its own;
        the remaining checks still run.
        """
        ctx = CheckContext(
            markup=markup,
            valid_tags=self._valid_tags,
            nesting_rules=self._nesting_rules,
            void_elements=get_parse_config().void_elements,
        )
        diagnostics: list[Diagnostic] = []
        for check in self._checks:
            name = check.check_name
            try:
                found = list(check(ctx))
            except Exception as e:
                logger.warning("Check %r failed", name, exc_info=True)
                diagnostics.append(Diagnostic(name, f"Check '{name}' failed: {e}"))
                continue
            if found:
                logger.debug("%s: %d finding(s)", name, len(found))
            diagnostics.extend(found)
        return diagnostics

    def detect(self, markup: str) -> list[str]:
        """Messages of :meth:`run`, in order. Empty means no findings."""
        return [d.message for d in self.run(markup)]


_DEFAULT_DETECTOR = Detector()


def detect(markup: str) -> list[str]:
    """Run the default checks over ``markup`` and return the messages."""
    return _DEFAULT_DETECTOR.detect(markup)


__all__ = ["Detector", "detect"]
