from dataclasses import dataclass

from ..domain.entities import Department


@dataclass
class PersonInput:
    name: str
    email: str
    password: str

    def extra_fields(self) -> dict:
        return {}


@dataclass
class StudentInput(PersonInput):
    age: int

    def extra_fields(self) -> dict:
        return {"age": self.age}


@dataclass
class ProfessorInput(PersonInput):
    department: Department

    def extra_fields(self) -> dict:
        return {"department": Department(self.department)}


@dataclass
class ListQuery:
    page_number: int = 1
    page_size: int = 10
    sort_field: str = "name"


@dataclass
class UpdateOutcome:
    matched_count: int
    modified_count: int


@dataclass
class DeleteOutcome:
    deleted_count: int
    acknowledged: bool = True
