from pydantic import BaseModel, EmailStr, Field, field_validator

from ...domain.entities import Department


class PersonIn(BaseModel):
    name: str = Field(min_length=3, max_length=20)
    email: EmailStr
    password: str = Field(min_length=8)

    # синтаксис email проверяем без внешних пробелов, остальное делает нормализация;
    # форма "Name <addr>" не принимается
    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        if not isinstance(v, str):
            return v
        if "<" in v or ">" in v:
            raise ValueError("email must be a bare address without a display name")
        return v.strip()

class StudentIn(PersonIn):
    age: int = Field(ge=18, le=99)

class ProfessorRegisterIn(PersonIn):
    pass

class ProfessorIn(PersonIn):
    department: Department

class StudentOut(BaseModel):
    id: str
    name: str
    email: str
    age: int
    class Config: from_attributes = True

class ProfessorOut(BaseModel):
    id: str
    name: str
    email: str
    department: Department
    class Config: from_attributes = True

class DeleteResp(BaseModel):
    acknowledged: bool
    deleted_count: int
    class Config: from_attributes = True

class FieldError(BaseModel):
    field: str
    message: str

class ErrorResp(BaseModel):
    detail: str
    errors: list[FieldError] | None = None
