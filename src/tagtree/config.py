"""ContextVar-based parse configuration for tagtree.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The parser reads the active config unless an explicit ``mode`` is passed.

Usage:
    # Direct parser usage
    from tagtree.config import set_parse_config, reset_parse_config, ParseConfig

    set_parse_config(ParseConfig(mode=ReconcileMode.STRICT))
    try:
        root = parse(tokens)
    finally:
        reset_parse_config()

    # Or use the context manager
    with parse_config_context(ParseConfig(mode=ReconcileMode.STRICT)):
        root = parse(tokens)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum

from tagtree.tags import VOID_ELEMENTS


class ReconcileMode(Enum):
    """How a closing tag is matched against the open-element stack.

    - STRICT: must match the top of the stack, otherwise ParseError
    - LENIENT: search the whole stack, auto-close everything above the match;
      ParseError when nothing matches or elements are left open
    - RECOVER: like LENIENT, but unmatched closers are dropped and elements
      left open at end of input stay in the tree. Never raises.

    """

    STRICT = "strict"
    LENIENT = "lenient"
    RECOVER = "recover"


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        mode: Closing-tag reconciliation policy
        void_elements: Lowercase names of elements that are never entered

    """

    mode: ReconcileMode = ReconcileMode.LENIENT
    void_elements: frozenset[str] = VOID_ELEMENTS

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Unknown keys are silently ignored. ``mode`` may be a ReconcileMode or
        its string value; ``void_elements`` may be any iterable of names.

        Example:
            >>> ParseConfig.from_dict({"mode": "strict", "unknown_key": 1}).mode
            <ReconcileMode.STRICT: 'strict'>

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "mode" in filtered:
            filtered["mode"] = ReconcileMode(filtered["mode"])
        if "void_elements" in filtered:
            filtered["void_elements"] = frozenset(n.lower() for n in filtered["void_elements"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "tagtree_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(mode=ReconcileMode.STRICT)):
        ...     get_parse_config().mode
        <ReconcileMode.STRICT: 'strict'>

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "ReconcileMode",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
