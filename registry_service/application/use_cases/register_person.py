import structlog

from ...domain.entities import Person
from ...domain.errors import ConflictError, InternalError, RegistryError
from ..dto import PersonInput
from ..guards import email_taken
from ..interfaces import IPasswordHasher, IPersonRepository
from ..normalization import normalize_identity

logger = structlog.get_logger(__name__)


class RegisterPerson:
    def __init__(self, repo: IPersonRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, data: PersonInput) -> Person:
        variant = self.repo.variant.value
        try:
            name, email = normalize_identity(data.name, data.email)
            if email_taken(self.repo, email):
                logger.info("registration_conflict", variant=variant)
                raise ConflictError()
            person = self.repo.insert({
                "name": name,
                "email": email,
                "password_hash": self.hasher.hash(data.password),
                **data.extra_fields(),
            })
        except RegistryError:
            raise
        except Exception as exc:
            # детали только в лог, клиенту - общее сообщение
            logger.error("registration_failed", variant=variant, exc_info=True)
            raise InternalError() from exc
        logger.info("registered", variant=variant, id=person.id)
        return person
