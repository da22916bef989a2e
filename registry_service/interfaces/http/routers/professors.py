from fastapi import APIRouter, Depends, Query, Request, Response, status

from ....application.dto import ListQuery, ProfessorInput
from ....application.use_cases.delete_person import DeletePerson
from ....application.use_cases.get_person import GetPerson
from ....application.use_cases.list_people import ListPeople
from ....application.use_cases.register_person import RegisterPerson
from ....application.use_cases.update_person import UpdatePerson
from ....config import settings
from ....domain.entities import Department
from ....domain.errors import ConflictError, InternalError
from ....infrastructure.metrics import registrations_total
from ....infrastructure.rate_limit import REGISTRATION_LIMIT, limiter
from ....infrastructure.repositories import ProfessorRepository
from ....infrastructure.security import PasswordHasher
from ..deps import get_hasher, get_professor_repository
from ..schemas import DeleteResp, ErrorResp, ProfessorIn, ProfessorOut, ProfessorRegisterIn

router = APIRouter(prefix="/api/professor", tags=["professors"])

@router.get("/health")
def health(): return {"status": "ok"}

@router.post(
    "/register-professor",
    response_model=ProfessorOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResp}, 409: {"model": ErrorResp}, 500: {"model": ErrorResp}},
)
@limiter.limit(REGISTRATION_LIMIT)
def register_professor(
    request: Request,
    payload: ProfessorRegisterIn,
    department: Department = Query(...),
    repo: ProfessorRepository = Depends(get_professor_repository),
    hasher: PasswordHasher = Depends(get_hasher),
):
    # кафедра приходит в query, остальное в теле
    uc = RegisterPerson(repo=repo, hasher=hasher)
    try:
        professor = uc.execute(ProfessorInput(**payload.model_dump(), department=department))
    except ConflictError:
        registrations_total.labels(variant="professor", outcome="conflict").inc()
        raise
    except InternalError:
        registrations_total.labels(variant="professor", outcome="error").inc()
        raise
    registrations_total.labels(variant="professor", outcome="created").inc()
    return ProfessorOut.model_validate(professor)

@router.get("/get-professors", response_model=list[ProfessorOut], responses={404: {"model": ErrorResp}})
def get_professors(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    sort_field: str = Query("name", alias="sortField"),
    repo: ProfessorRepository = Depends(get_professor_repository),
):
    uc = ListPeople(repo, max_page_size=settings.MAX_PAGE_SIZE)
    rows = uc.execute(ListQuery(page_number=page_number, page_size=page_size, sort_field=sort_field))
    return [ProfessorOut.model_validate(r) for r in rows]

@router.get("/get-professor/{professor_id}", response_model=ProfessorOut, responses={404: {"model": ErrorResp}})
def get_professor(professor_id: str, repo: ProfessorRepository = Depends(get_professor_repository)):
    return ProfessorOut.model_validate(GetPerson(repo).execute(professor_id))

@router.put(
    "/update-professor/{professor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResp}, 409: {"model": ErrorResp}},
)
def update_professor(
    professor_id: str,
    payload: ProfessorIn,
    repo: ProfessorRepository = Depends(get_professor_repository),
    hasher: PasswordHasher = Depends(get_hasher),
):
    UpdatePerson(repo=repo, hasher=hasher).execute(professor_id, ProfessorInput(**payload.model_dump()))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/delete-professor/{professor_id}", response_model=DeleteResp)
def delete_professor(professor_id: str, repo: ProfessorRepository = Depends(get_professor_repository)):
    return DeleteResp.model_validate(DeletePerson(repo).execute(professor_id))
