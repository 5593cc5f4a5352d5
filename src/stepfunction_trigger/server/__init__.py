"""Transport adapters for the trigger.

Design intent:
- Keep start/poll semantics in `stepfunction_trigger.trigger.*`
- Keep transport-specific concerns (routing, request parsing, CORS) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from stepfunction_trigger.server.app import create_app
