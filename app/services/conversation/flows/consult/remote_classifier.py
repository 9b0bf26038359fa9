from typing import Iterable

from app.core.keywords import REMOTE_SUPPORT_KEYWORDS, contains_any


def is_remote_candidate(description: str, keywords: Iterable[str] = REMOTE_SUPPORT_KEYWORDS) -> bool:
    """
    True si el problema suele resolverse con soporte remoto (licencias,
    antivirus, Office, activaciones...); False sugiere visita al taller.
    """
    return contains_any(description, tuple(keywords))
