from ...domain.entities import Person
from ...domain.errors import NotFound
from ..interfaces import IPersonRepository


class GetPerson:
    def __init__(self, repo: IPersonRepository):
        self.repo = repo

    def execute(self, record_id: str) -> Person:
        person = self.repo.get_by_id(record_id)
        if person is None:
            raise NotFound(f"{self.repo.variant.label} not found")
        return person
