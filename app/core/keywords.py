"""
Conjuntos de palabras clave usados por el motor de conversación.

Son datos de configuración: la detección es siempre por contención de
subcadenas sobre el texto en minúsculas, sin ningún tipo de clasificador.
"""

# Comandos universales que regresan al menú desde cualquier estado
RESET_KEYWORDS = frozenset({"menu", "menú", "inicio", "home"})

# Recargos del estimado de reparación: cada grupo suma una sola vez
REPAIR_SURCHARGES = (
    (("no enciende", "pantalla"), 15000),
    (("virus", "malware"), 8000),
)

# Problemas que normalmente se resuelven con soporte remoto
REMOTE_SUPPORT_KEYWORDS = (
    "licencia",
    "antivirus",
    "office",
    "activación",
    "activacion",
    "activar",
    "instalar",
    "instalación",
    "programa",
    "software",
    "correo",
    "contraseña",
    "configurar",
    "driver",
)

# Prefijos para hacer una pregunta directa a la IA desde el menú
AI_PREFIXES = ("ai ", "gpt ", "chat ")

# Palabras de los estados con dos opciones
SCHEDULE_KEYWORDS = ("agendar",)
PRICE_KEYWORDS = ("precio", "costo")
CATALOG_KEYWORDS = ("catalogo", "catálogo", "inventario")
CONFIRM_KEYWORDS = ("confirm",)
CONFIRM_WORDS = ("si", "sí", "ok", "dale")
CANCEL_KEYWORDS = ("cancel",)
CANCEL_WORDS = ("no",)


def is_reset_keyword(text: str) -> bool:
    return (text or "").strip().lower() in RESET_KEYWORDS


def contains_any(text: str, keywords) -> bool:
    """True si alguna palabra clave aparece en el texto (sin distinguir mayúsculas)."""
    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in keywords)


def has_word(text: str, words) -> bool:
    """True si alguna palabra aparece como palabra completa."""
    tokens = {token.strip(".,;:!¡?¿\"'") for token in (text or "").lower().split()}
    return any(word in tokens for word in words)
