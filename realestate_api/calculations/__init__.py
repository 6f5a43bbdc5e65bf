"""
Calculation Engine

Pure real estate investment formulas. Nothing in this package knows about
HTTP; every function takes plain numbers and returns plain values.
"""

from realestate_api.calculations import amortization, income, leverage, returns, validation
from realestate_api.calculations.validation import ValidationError

__all__ = ["amortization", "income", "leverage", "returns", "validation", "ValidationError"]
