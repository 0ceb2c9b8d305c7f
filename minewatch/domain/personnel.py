from dataclasses import dataclass
from typing import Optional

from minewatch.domain.errors import ValidationError


def _required(value: Optional[str], label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


@dataclass(frozen=True)
class Person:
    id: str
    first_name: str
    last_name: str

    def __post_init__(self):
        object.__setattr__(self, "id", _required(self.id, "Person id"))
        object.__setattr__(self, "first_name", _required(self.first_name, "First name"))
        object.__setattr__(self, "last_name", _required(self.last_name, "Last name"))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Operator:
    person: Person
    license: str
    equipment_id: str

    def __post_init__(self):
        object.__setattr__(self, "license", _required(self.license, "License"))
        object.__setattr__(self, "equipment_id", _required(self.equipment_id, "Assigned equipment"))


@dataclass(frozen=True)
class Supervisor:
    person: Person
    equipment_id: str

    def __post_init__(self):
        object.__setattr__(self, "equipment_id", _required(self.equipment_id, "Assigned equipment"))
