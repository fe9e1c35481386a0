"""
Person dataclass and roles.

A Person is someone known to the campus. Movements may reference ids that have no
Person yet; those are tracked by id alone until the person is registered.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(Enum):
    """Role of a person on campus (also used to restrict locations)."""

    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    WORKER = "WORKER"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        """Human-readable role name."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["Role"]:
        """
        Convert role text (case-insensitive) to a Role.

        Args:
            text: Role name, e.g. "teacher". Empty or None means no role.

        Returns:
            The matching Role, or None for empty text

        Raises:
            ValueError: If the text is not a known role
        """
        if text is None or not text.strip():
            return None
        try:
            return cls(text.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown role '{text}'") from None


@dataclass(frozen=True)
class Person:
    """
    A person registered on campus.

    Identity is the id: two Person objects are equal iff their ids match.

    Attributes:
        id: Unique identifier
        name: Display name
        role: Role on campus
    """

    id: str
    name: str
    role: Role

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
