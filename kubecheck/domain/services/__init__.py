"""Domain services package."""

from .evaluation import collect_assertion_groups, evaluate_expectations

__all__ = ["collect_assertion_groups", "evaluate_expectations"]
