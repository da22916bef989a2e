import uuid

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .metrics import db_queries_total
from .models import ProfessorORM, StudentORM
from ..application.dto import DeleteOutcome, UpdateOutcome
from ..application.interfaces import IPersonRepository
from ..domain.entities import Department, Person, Professor, Student, Variant
from ..domain.errors import ConflictError


class SqlPersonRepository(IPersonRepository):
    """Коллекция одного варианта поверх таблицы SQLAlchemy.

    Подклассы задают ``model``, ``variant`` и ``to_domain``. Нарушение
    уникального индекса по email превращается в ``ConflictError``.
    """

    model = None
    variant: Variant

    def __init__(self, db: Session): self.db = db

    def to_domain(self, row) -> Person:
        raise NotImplementedError

    def _track(self):
        db_queries_total.labels(collection=self.variant.collection).inc()

    def _columns(self, values: dict) -> dict:
        return {k: v.value if isinstance(v, Department) else v for k, v in values.items()}

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError() from exc

    def find_by_email(self, email: str) -> list[Person]:
        self._track()
        rows = self.db.query(self.model).filter(self.model.email == email).all()
        return [self.to_domain(r) for r in rows]

    def insert(self, values: dict) -> Person:
        self._track()
        row = self.model(id=uuid.uuid4().hex, **self._columns(values))
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return self.to_domain(row)

    def count(self) -> int:
        self._track()
        return self.db.query(func.count(self.model.id)).scalar() or 0

    def list(self, page_number: int, page_size: int, sort_field: str) -> list[Person]:
        self._track()
        column = getattr(self.model, sort_field)
        rows = (self.db.query(self.model)
                .order_by(column.asc(), self.model.id.asc())
                .offset((page_number - 1) * page_size)
                .limit(page_size)
                .all())
        return [self.to_domain(r) for r in rows]

    def get_by_id(self, record_id: str) -> Person | None:
        self._track()
        row = self.db.get(self.model, record_id)
        return self.to_domain(row) if row else None

    def replace_fields(self, record_id: str, values: dict) -> UpdateOutcome:
        self._track()
        row = self.db.get(self.model, record_id)
        if row is None:
            return UpdateOutcome(matched_count=0, modified_count=0)
        columns = self._columns(values)
        modified = any(getattr(row, k) != v for k, v in columns.items())
        for k, v in columns.items():
            setattr(row, k, v)
        self._commit()
        return UpdateOutcome(matched_count=1, modified_count=int(modified))

    def delete_by_id(self, record_id: str) -> DeleteOutcome:
        self._track()
        deleted = self.db.query(self.model).filter(self.model.id == record_id).delete()
        self.db.commit()
        return DeleteOutcome(deleted_count=deleted)


class StudentRepository(SqlPersonRepository):
    model = StudentORM
    variant = Variant.STUDENT

    def to_domain(self, row: StudentORM) -> Student:
        return Student(id=row.id, name=row.name, email=row.email,
                       password_hash=row.password_hash, age=row.age)


class ProfessorRepository(SqlPersonRepository):
    model = ProfessorORM
    variant = Variant.PROFESSOR

    def to_domain(self, row: ProfessorORM) -> Professor:
        return Professor(id=row.id, name=row.name, email=row.email,
                         password_hash=row.password_hash, department=Department(row.department))
