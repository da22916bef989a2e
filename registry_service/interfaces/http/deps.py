from fastapi import Depends
from sqlalchemy.orm import Session

from ...infrastructure.db import get_db
from ...infrastructure.repositories import ProfessorRepository, StudentRepository
from ...infrastructure.security import PasswordHasher


def get_student_repository(db: Session = Depends(get_db)) -> StudentRepository:
    return StudentRepository(db)

def get_professor_repository(db: Session = Depends(get_db)) -> ProfessorRepository:
    return ProfessorRepository(db)

def get_hasher() -> PasswordHasher:
    return PasswordHasher()
