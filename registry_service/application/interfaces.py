from ..domain.entities import Person, Variant
from .dto import DeleteOutcome, UpdateOutcome


class IPersonRepository:
    variant: Variant

    def find_by_email(self, email: str) -> list[Person]: ...
    def insert(self, values: dict) -> Person: ...
    def count(self) -> int: ...
    def list(self, page_number: int, page_size: int, sort_field: str) -> list[Person]: ...
    def get_by_id(self, record_id: str) -> Person | None: ...
    def replace_fields(self, record_id: str, values: dict) -> UpdateOutcome: ...
    def delete_by_id(self, record_id: str) -> DeleteOutcome: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...
