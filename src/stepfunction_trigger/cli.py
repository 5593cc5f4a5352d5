"""Console script shim; the CLI lives in `stepfunction_trigger.trigger.main`."""

from __future__ import annotations

from stepfunction_trigger.trigger.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
