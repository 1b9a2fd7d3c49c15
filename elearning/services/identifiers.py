"""
Identifier parsing shared by the e-learning services.

Primary keys are positive integers. Clients send them as JSON numbers or as
strings, so both are accepted.
"""

from typing import Any, Optional


def parse_identifier(value: Any) -> Optional[int]:
    """
    Parse a primary key sent by a client.

    Returns:
        The integer key, or None if the value is not a well-formed identifier
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None
