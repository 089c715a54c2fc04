"""Validation module for verifying report consistency."""

from turnushelper.validation.validator import ReportValidator, ValidationError

__all__ = [
    "ReportValidator",
    "ValidationError",
]
