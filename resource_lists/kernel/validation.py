"""
Resource Lists Kernel — Validation

A validator is a pure function: (candidate) -> list of violation messages.
Empty list = valid. Order matters: the orchestrator surfaces only the first
message as the operation's failure, but callers can always compute the whole
list by calling the validator themselves.

Validation is structural (is this candidate well-formed?). Whether the id is
already taken is the orchestrator's guard, not a validator's job.
"""

from __future__ import annotations

from collections.abc import Callable

from resource_lists.kernel.types import Resource

Validator = Callable[[Resource], list[str]]


def first_violation(violations: list[str]) -> str | None:
    return violations[0] if violations else None


def combine(*validators: Validator) -> Validator:
    """Run validators in order and concatenate their violations."""

    def validate(candidate: Resource) -> list[str]:
        errors: list[str] = []
        for validator in validators:
            errors.extend(validator(candidate))
        return errors

    return validate


def not_blank(field: str, message: str | None = None) -> Validator:
    """Violation when the field is missing, None, or an all-whitespace string."""
    msg = message or f"{field} can't be empty"

    def validate(candidate: Resource) -> list[str]:
        value = getattr(candidate, field, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            return [msg]
        return []

    return validate


def max_length(field: str, limit: int, message: str | None = None) -> Validator:
    """Violation when the field's length exceeds `limit`."""
    msg = message or f"{field} length is restricted to {limit} characters"

    def validate(candidate: Resource) -> list[str]:
        value = getattr(candidate, field, None)
        if value is not None and len(value) > limit:
            return [msg]
        return []

    return validate
