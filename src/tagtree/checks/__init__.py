"""Detector checks.

Architecture:
checks/
├── __init__.py          # Re-exports, DEFAULT_CHECKS
├── protocol.py          # Diagnostic, CheckContext, Check
├── registry.py          # CheckRegistry, CheckRegistryBuilder, @check
├── nesting.py           # NestingRules table
└── builtins/
    ├── markup.py        # Checks over the raw text
    └── tree.py          # Checks over the recovered tree

"""

from tagtree.checks.builtins import BUILTIN_CHECKS
from tagtree.checks.nesting import NestingRules
from tagtree.checks.protocol import Check, CheckContext, Diagnostic
from tagtree.checks.registry import CheckRegistry, CheckRegistryBuilder, check

DEFAULT_CHECKS: CheckRegistry = CheckRegistryBuilder(BUILTIN_CHECKS).build()

__all__ = [
    "DEFAULT_CHECKS",
    "Check",
    "CheckContext",
    "CheckRegistry",
    "CheckRegistryBuilder",
    "Diagnostic",
    "NestingRules",
    "check",
]
