import secrets
import string
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.timezone_helper import TimezoneHelper

_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_record_id(length: int = 8) -> str:
    """Identificador corto y fácil de dictar por WhatsApp (ej. "K3F9QZ2A")."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class Appointment(BaseModel):
    """Cita agendada. Se agrega a la colección y nunca se modifica."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_record_id)
    created_at: str = Field(default_factory=TimezoneHelper.now_iso, alias="createdAt")
    user_id: str = Field(..., alias="userId")
    name: str
    phone: str
    date: str
    time: str
    branch_id: Optional[str] = Field(None, alias="branchId")
    service: Optional[str] = None

    def to_document(self) -> Dict:
        return self.model_dump(by_alias=True)


class CaseReport(BaseModel):
    """Caso de texto libre producido al completar un flujo distinto de la cita."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_record_id)
    created_at: str = Field(default_factory=TimezoneHelper.now_iso, alias="createdAt")
    user_id: str = Field(..., alias="userId")
    kind: str
    fields: Dict[str, str] = Field(default_factory=dict)
    estimate: Optional[int] = None
    remote: Optional[bool] = None
    status: str = "recibido"

    def to_document(self) -> Dict:
        return self.model_dump(by_alias=True)
