from typing import Dict

from app.models.session import Session

SAME_NUMBER_WORDS = ("mismo", "el mismo", "igual")


def same_phone(value: str, session: Session) -> str:
    """"mismo" -> número desde el que escribe el usuario."""
    if value.strip().lower() in SAME_NUMBER_WORDS:
        return session.phone_number
    return value


def option_label(labels: Dict[str, str]):
    """Crea un normalizador que cambia "1".."4" por su etiqueta; otro texto se guarda tal cual."""
    def normalize(value: str, session: Session) -> str:
        return labels.get(value.strip(), value)
    return normalize


def numbered_options(labels: Dict[str, str]) -> str:
    return "\n".join(f"{key}. {label}" for key, label in labels.items())
