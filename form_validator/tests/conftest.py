"""
Shared fixtures: small external data types used as binding types.

The engine never implements constraints itself; these stand in for the
type-conversion layer of a real application.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

import pytest

from form_validator.errors import ConstraintError, ParseError


class IntegerType:
    def __init__(self, minimum: Optional[int] = None, maximum: Optional[int] = None) -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.parsed = []

    def parse_value(self, value: Any, internal_type: Optional[str] = None) -> int:
        self.parsed.append(value)
        try:
            return int(str(value).strip())
        except ValueError:
            raise ParseError(f"'{value}' is not a valid integer.") from None

    def validate_value(self, value: int) -> None:
        if self.minimum is not None and value < self.minimum:
            raise ConstraintError(f"Enter a number of at least {self.minimum}.")
        if self.maximum is not None and value > self.maximum:
            raise ConstraintError(f"Enter a number of at most {self.maximum}.")


class DateType:
    def __init__(self, fmt: str = "%Y-%m-%d") -> None:
        self.fmt = fmt

    def parse_value(self, value: Any, internal_type: Optional[str] = None) -> date:
        try:
            return datetime.strptime(str(value), self.fmt).date()
        except ValueError:
            raise ParseError(f"Enter a date like {date(2024, 1, 31).strftime(self.fmt)}.") from None

    def validate_value(self, value: date) -> None:
        return None


@pytest.fixture
def integer_type():
    return IntegerType(minimum=0, maximum=150)


@pytest.fixture
def date_type():
    return DateType()
