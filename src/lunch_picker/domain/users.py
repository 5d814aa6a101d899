"""Domain models for authorized users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Represents a user known to the directory."""

    username: str
