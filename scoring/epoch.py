"""Monotonic generation counter for cancellation-by-supersession.

An asynchronous task captures a token before it starts. When it finishes,
its result is applied only if the token is still current. Anything that
advances the counter in the meantime (a newer request, a reset) turns the
task's completion into a no-op. The underlying work is never aborted.
"""

from __future__ import annotations


class EpochCounter:
    """Issues increasing tokens and answers whether a token is still live."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self) -> int:
        """Start a new epoch and return its token."""
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current
