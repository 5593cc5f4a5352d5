"""Core of the trigger: settings, logging, the engine client, the execution
registry and the progress projection.

Transport concerns (routing, request parsing) live in
`stepfunction_trigger.server`.
"""
