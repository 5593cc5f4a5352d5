"""Step Functions trigger.

A small control surface for one long-running Step Functions execution:
- start it with a JSON "marks" payload
- poll a human-readable summary of its progress, rebuilt from the execution
  history on every request
"""

__version__ = "0.1.0"

from stepfunction_trigger.trigger.config import TriggerSettings

__all__ = ["__version__", "TriggerSettings"]
