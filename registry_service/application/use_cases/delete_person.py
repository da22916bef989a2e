import structlog

from ..dto import DeleteOutcome
from ..interfaces import IPersonRepository

logger = structlog.get_logger(__name__)


class DeletePerson:
    def __init__(self, repo: IPersonRepository):
        self.repo = repo

    def execute(self, record_id: str) -> DeleteOutcome:
        outcome = self.repo.delete_by_id(record_id)
        logger.info("deleted", variant=self.repo.variant.value, id=record_id, deleted=outcome.deleted_count)
        return outcome
