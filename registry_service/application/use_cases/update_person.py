import structlog

from ...domain.errors import NotFound
from ..dto import PersonInput, UpdateOutcome
from ..interfaces import IPasswordHasher, IPersonRepository
from ..normalization import normalize_identity

logger = structlog.get_logger(__name__)


class UpdatePerson:
    """Полная замена полей существующей записи.

    Перезаписываются все изменяемые поля, ``id`` не меняется. Имя и email
    нормализуются так же, как при регистрации. Если сохранённый хэш уже
    подходит к переданному паролю, он остаётся прежним, поэтому повтор того
    же payload не меняет запись.

    Несуществующий id -> ``NotFound``. Уникальность email держит индекс
    хранилища, репозиторий превращает нарушение в ``ConflictError``.
    """

    def __init__(self, repo: IPersonRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, record_id: str, data: PersonInput) -> UpdateOutcome:
        variant = self.repo.variant
        current = self.repo.get_by_id(record_id)
        if current is None:
            raise NotFound(f"{variant.label} not found")

        name, email = normalize_identity(data.name, data.email)
        if self.hasher.verify(data.password, current.password_hash):
            password_hash = current.password_hash
        else:
            password_hash = self.hasher.hash(data.password)

        outcome = self.repo.replace_fields(record_id, {
            "name": name,
            "email": email,
            "password_hash": password_hash,
            **data.extra_fields(),
        })
        if outcome.matched_count == 0:
            # удалили между чтением и записью
            raise NotFound(f"{variant.label} not found")
        logger.info("updated", variant=variant.value, id=record_id, modified=outcome.modified_count)
        return outcome
