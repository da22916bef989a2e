def normalize_text(value: str) -> str:
    """Обрезает пробелы по краям и приводит к нижнему регистру."""
    return value.strip().lower()


def normalize_identity(name: str, email: str) -> tuple[str, str]:
    return normalize_text(name), normalize_text(email)
