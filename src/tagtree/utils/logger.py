"""Logger access for tagtree modules.

Every module logs under the ``tagtree`` namespace, so a host tunes the whole
library through ``logging.getLogger("tagtree")``. The package logger carries
only a NullHandler; the CLI configures real output under ``--verbose``.
"""

from __future__ import annotations

import logging

_NAMESPACE = "tagtree"

logging.getLogger(_NAMESPACE).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` inside the ``tagtree`` namespace.

    Module names from the package (``__name__``) pass through; anything
    else is nested under it, so ``get_logger("lint")`` is ``tagtree.lint``.
    """
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
