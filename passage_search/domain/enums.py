"""Domain enumerations for the passage search application.

Enums represent fixed sets of domain values (filter fields, breaker states).
"""

from enum import Enum


class FilterField(str, Enum):
    """Categorical passage fields that can feed filter options in the UI."""

    TYPE = "type"
    AUTHOR = "author"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid field values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [field.value for field in cls]


class CircuitState(str, Enum):
    """Circuit breaker state.

    CLOSED passes calls through and samples outcomes; OPEN fails fast;
    HALF_OPEN admits a single trial call.
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"
