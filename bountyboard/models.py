"""Task and user records exchanged with API clients."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping


class TaskStatus(str, Enum):
    """Lifecycle states of a bounty task."""

    OPEN = "OPEN"
    CLAIMED = "CLAIMED"
    COMPLETED = "COMPLETED"


class Role(str, Enum):
    """Roles a wallet address can hold."""

    ADMIN = "ADMIN"
    USER = "USER"


_OPTIONAL_FIELDS = frozenset({"claimer", "proof"})


@dataclass
class Task:
    """A bounty task; every field is a plain string."""

    id: str = ""
    title: str = ""
    description: str = ""
    creator: str = ""
    bounty: str = ""
    status: str = ""
    claimer: str = ""
    proof: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.status, TaskStatus):
            self.status = self.status.value

    def to_dict(self) -> dict[str, str]:
        """Return the JSON form; empty claimer and proof are left out."""
        result: dict[str, str] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name in _OPTIONAL_FIELDS and not value:
                continue
            result[field.name] = value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Build a task from decoded JSON, ignoring unknown keys.

        Raises ValueError when the input is not an object or a known
        field holds something other than a string or null.
        """
        if not isinstance(data, Mapping):
            raise ValueError("task must be a JSON object")
        values: dict[str, str] = {}
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(
                    f"field {field.name!r} must be a string, got {type(value).__name__}"
                )
            values[field.name] = value
        return cls(**values)


@dataclass
class User:
    """A wallet address together with its role."""

    address: str
    role: Role = Role.USER

    def to_dict(self) -> dict[str, str]:
        """Return the JSON form of the user."""
        role = self.role.value if isinstance(self.role, Role) else self.role
        return {"address": self.address, "role": role}