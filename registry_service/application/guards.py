from .interfaces import IPersonRepository


def email_taken(repo: IPersonRepository, email: str) -> bool:
    """Есть ли уже запись этого варианта с таким email (email уже нормализован)."""
    return bool(repo.find_by_email(email))
