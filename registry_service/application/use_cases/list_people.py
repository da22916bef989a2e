from ...domain.entities import SORT_FIELDS, Person, Variant
from ...domain.errors import NotFoundEmpty, ValidationError
from ..dto import ListQuery
from ..interfaces import IPersonRepository

# смещение должно помещаться в целое хранилища
MAX_OFFSET = 2**31 - 1


def resolve_sort_field(variant: Variant, requested: str) -> str | None:
    """Сопоставляет поле сортировки с белым списком варианта.

    Регистр и пробелы по краям не важны: ``"Name"`` -> ``"name"``.
    Для полей вне списка возвращает None.
    """
    wanted = requested.strip().lower()
    for field in SORT_FIELDS[variant]:
        if field == wanted:
            return field
    return None


class ListPeople:
    def __init__(self, repo: IPersonRepository, max_page_size: int = 100):
        self.repo = repo
        self.max_page_size = max_page_size

    def execute(self, query: ListQuery) -> list[Person]:
        variant = self.repo.variant
        errors = []
        page_size_ok = 1 <= query.page_size <= self.max_page_size
        if query.page_number < 1:
            errors.append({"field": "pageNumber", "message": "pageNumber must be at least 1"})
        elif page_size_ok and (query.page_number - 1) * query.page_size > MAX_OFFSET:
            max_page = MAX_OFFSET // query.page_size + 1
            errors.append({"field": "pageNumber", "message": f"pageNumber must be at most {max_page}"})
        if not page_size_ok:
            errors.append({"field": "pageSize",
                           "message": f"pageSize must be between 1 and {self.max_page_size}"})
        sort_field = resolve_sort_field(variant, query.sort_field)
        if sort_field is None:
            allowed = ", ".join(SORT_FIELDS[variant])
            errors.append({"field": "sortField", "message": f"sortField must be one of: {allowed}"})
        if errors:
            raise ValidationError(errors)

        rows = self.repo.list(query.page_number, query.page_size, sort_field)
        if rows:
            return rows
        # пустая коллекция и страница за концом - один исход, разные сообщения
        if query.page_number > 1 and self.repo.count() > 0:
            raise NotFoundEmpty(f"Page {query.page_number} is out of range")
        raise NotFoundEmpty(f"No {variant.collection} found")
