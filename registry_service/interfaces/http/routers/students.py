from fastapi import APIRouter, Depends, Query, Request, Response, status

from ....application.dto import ListQuery, StudentInput
from ....application.use_cases.delete_person import DeletePerson
from ....application.use_cases.get_person import GetPerson
from ....application.use_cases.list_people import ListPeople
from ....application.use_cases.register_person import RegisterPerson
from ....application.use_cases.update_person import UpdatePerson
from ....config import settings
from ....domain.errors import ConflictError, InternalError
from ....infrastructure.metrics import registrations_total
from ....infrastructure.rate_limit import REGISTRATION_LIMIT, limiter
from ....infrastructure.repositories import StudentRepository
from ....infrastructure.security import PasswordHasher
from ..deps import get_hasher, get_student_repository
from ..schemas import DeleteResp, ErrorResp, StudentIn, StudentOut

router = APIRouter(prefix="/api/student", tags=["students"])

@router.get("/health")
def health(): return {"status": "ok"}

@router.post(
    "/register-student",
    response_model=StudentOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResp}, 409: {"model": ErrorResp}, 500: {"model": ErrorResp}},
)
@limiter.limit(REGISTRATION_LIMIT)
def register_student(
    request: Request,
    payload: StudentIn,
    repo: StudentRepository = Depends(get_student_repository),
    hasher: PasswordHasher = Depends(get_hasher),
):
    uc = RegisterPerson(repo=repo, hasher=hasher)
    try:
        student = uc.execute(StudentInput(**payload.model_dump()))
    except ConflictError:
        registrations_total.labels(variant="student", outcome="conflict").inc()
        raise
    except InternalError:
        registrations_total.labels(variant="student", outcome="error").inc()
        raise
    registrations_total.labels(variant="student", outcome="created").inc()
    return StudentOut.model_validate(student)

@router.get("/get-students", response_model=list[StudentOut], responses={404: {"model": ErrorResp}})
def get_students(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    sort_field: str = Query("name", alias="sortField"),
    repo: StudentRepository = Depends(get_student_repository),
):
    uc = ListPeople(repo, max_page_size=settings.MAX_PAGE_SIZE)
    rows = uc.execute(ListQuery(page_number=page_number, page_size=page_size, sort_field=sort_field))
    return [StudentOut.model_validate(r) for r in rows]

@router.get("/get-student/{student_id}", response_model=StudentOut, responses={404: {"model": ErrorResp}})
def get_student(student_id: str, repo: StudentRepository = Depends(get_student_repository)):
    return StudentOut.model_validate(GetPerson(repo).execute(student_id))

@router.put(
    "/update-student/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResp}, 409: {"model": ErrorResp}},
)
def update_student(
    student_id: str,
    payload: StudentIn,
    repo: StudentRepository = Depends(get_student_repository),
    hasher: PasswordHasher = Depends(get_hasher),
):
    UpdatePerson(repo=repo, hasher=hasher).execute(student_id, StudentInput(**payload.model_dump()))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/delete-student/{student_id}", response_model=DeleteResp)
def delete_student(student_id: str, repo: StudentRepository = Depends(get_student_repository)):
    return DeleteResp.model_validate(DeletePerson(repo).execute(student_id))
