"""In-memory pointer to the execution a poll should target.

Nothing here is persisted; a process restart forgets every recorded execution.
Slots are keyed by a caller-supplied session token so independent callers can
start and poll their own executions. Callers that send no token share the
default slot, and within a slot the last ``record`` wins.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class ExecutionRegistry:
    def __init__(self) -> None:
        self._slots: dict[str, str] = {}
        self._lock = threading.Lock()

    def record(self, execution_arn: str, *, session: str = DEFAULT_SESSION) -> None:
        """Remember ``execution_arn`` as the latest execution for ``session``."""

        if not execution_arn.strip():
            raise ValueError("execution_arn is required")
        with self._lock:
            previous = self._slots.get(session)
            self._slots[session] = execution_arn
        if previous is not None and previous != execution_arn:
            logger.info(
                "Replaced latest execution",
                extra={"session": session, "previous": previous, "execution_arn": execution_arn},
            )

    def current(self, *, session: str = DEFAULT_SESSION) -> str | None:
        """Return the latest execution for ``session``, or None if none was recorded."""

        with self._lock:
            return self._slots.get(session)
