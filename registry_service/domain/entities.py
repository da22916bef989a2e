from dataclasses import dataclass
from enum import Enum


class Variant(str, Enum):
    STUDENT = "student"
    PROFESSOR = "professor"

    @property
    def collection(self) -> str:
        return f"{self.value}s"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Department(str, Enum):
    COMPUTER_SCIENCE = "ComputerScience"
    MATHEMATICS = "Mathematics"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    ENGINEERING = "Engineering"
    ECONOMICS = "Economics"
    LITERATURE = "Literature"


@dataclass(frozen=True)
class Student:
    id: str | None
    name: str
    email: str
    password_hash: str
    age: int


@dataclass(frozen=True)
class Professor:
    id: str | None
    name: str
    email: str
    password_hash: str
    department: Department


Person = Student | Professor

# Поля, по которым разрешена сортировка списка
SORT_FIELDS: dict[Variant, tuple[str, ...]] = {
    Variant.STUDENT: ("name", "email", "age"),
    Variant.PROFESSOR: ("name", "email", "department"),
}
