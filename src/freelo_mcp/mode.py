"""Process mode — restricted (read-only) or full.

The mode is resolved once at process start and never changes afterwards.
Callers receive it as a value and pass it to the tool gate explicitly.
"""

from __future__ import annotations

import enum
import functools
import os
import sys
from collections.abc import Mapping, Sequence

from .constants import READONLY_FLAGS


class Mode(enum.Enum):
    """Which tool families the server exposes."""

    RESTRICTED = "readonly"
    FULL = "full"

    @property
    def readonly(self) -> bool:
        return self is Mode.RESTRICTED


def resolve_mode(
    environ: Mapping[str, str] | None = None,
    argv: Sequence[str] | None = None,
) -> Mode:
    """Resolve the mode from the environment and command-line arguments.

    First match wins:
      1. ``FREELO_READONLY`` set to the literal ``"true"``.
      2. ``--readonly`` or ``-r`` anywhere in ``argv``.
      3. Full mode.

    Args:
        environ: Environment mapping. Defaults to ``os.environ``.
        argv: Invocation arguments. Defaults to ``sys.argv[1:]``.
    """
    env = os.environ if environ is None else environ
    args = sys.argv[1:] if argv is None else argv

    if env.get("FREELO_READONLY") == "true":
        return Mode.RESTRICTED
    if any(arg in READONLY_FLAGS for arg in args):
        return Mode.RESTRICTED
    return Mode.FULL


@functools.cache
def get_mode() -> Mode:
    """Get the process-wide mode, resolving it on first call."""
    return resolve_mode()
