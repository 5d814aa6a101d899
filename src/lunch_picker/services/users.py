"""Authorized user directory."""

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from lunch_picker.domain.users import UserRecord

_logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    """Lookup interface for users allowed to create sessions."""

    def exists(self, username: str) -> bool:
        """Return whether the username is known."""

    def list_usernames(self) -> list[str]:
        """Return all known usernames."""

    def add_usernames(self, usernames: Iterable[str]) -> None:
        """Store usernames, ignoring ones already present."""


@dataclass
class UserService:
    """Application service for the user directory."""

    directory: UserDirectory

    def list_users(self) -> list[UserRecord]:
        """Return all users in the directory."""
        return [UserRecord(username=name) for name in self.directory.list_usernames()]

    def import_csv(self, path: str | Path) -> int:
        """Load usernames from a CSV file with a header row."""
        usernames = _read_usernames(Path(path))
        if usernames:
            self.directory.add_usernames(usernames)
        _logger.info("Imported users: path=%s count=%s", path, len(usernames))
        return len(usernames)


def _read_usernames(path: Path) -> list[str]:
    """Return trimmed, de-duplicated usernames from the first CSV column."""
    seen: dict[str, None] = {}
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        next(reader, None)
        for row in reader:
            if not row:
                continue
            name = row[0].strip()
            if name:
                seen.setdefault(name, None)
    return list(seen)
