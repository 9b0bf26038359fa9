from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, Field


class Flow(str, Enum):
    """Flujos de conversación disponibles desde el menú principal."""
    REPARACION = "reparacion"
    MANTENIMIENTO = "mantenimiento"
    OTROS = "otros"
    SUCURSALES = "sucursales"
    CITA = "cita"
    ESTADO = "estado"
    CONSULTA = "consulta"
    ASESOR = "asesor"


class State(str, Enum):
    """Paso actual de la sesión. MENU es el único estado inactivo."""
    MENU = "menu"

    # Reparación
    REPARACION_PROBLEMA = "reparacion_problema"
    REPARACION_NOMBRE = "reparacion_nombre"
    REPARACION_UBICACION = "reparacion_ubicacion"

    # Mantenimiento
    MANTENIMIENTO_OPCION = "mantenimiento_opcion"

    # Otros servicios
    OTROS_SOLICITUD = "otros_solicitud"

    # Sucursales
    SUCURSALES_SELECCION = "sucursales_seleccion"

    # Cita
    CITA_SUCURSAL = "cita_sucursal"
    CITA_NOMBRE = "cita_nombre"
    CITA_TELEFONO = "cita_telefono"
    CITA_FECHA = "cita_fecha"
    CITA_HORA = "cita_hora"
    CITA_CONFIRMAR = "cita_confirmar"

    # Estado de un caso o cita
    ESTADO_CODIGO = "estado_codigo"

    # Consulta técnica rápida
    CONSULTA_NOMBRE = "consulta_nombre"
    CONSULTA_CORREO = "consulta_correo"
    CONSULTA_ZONA = "consulta_zona"
    CONSULTA_HORARIO = "consulta_horario"
    CONSULTA_EQUIPO = "consulta_equipo"
    CONSULTA_MARCA = "consulta_marca"
    CONSULTA_SISTEMA = "consulta_sistema"
    CONSULTA_SINTOMA = "consulta_sintoma"
    CONSULTA_DURACION = "consulta_duracion"
    CONSULTA_REPARACIONES = "consulta_reparaciones"

    # Asesor humano
    ASESOR_NOMBRE = "asesor_nombre"
    ASESOR_MENSAJE = "asesor_mensaje"


class Session(BaseModel):
    """
    Progreso de la conversación de un usuario.

    `state` se guarda como texto para poder detectar valores corruptos
    leídos del almacenamiento; el motor lo convierte a `State`.
    """
    user_id: str
    state: str = State.MENU.value
    flow: Optional[str] = None
    answers: Dict[str, str] = Field(default_factory=dict)
    updated_at: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.state == State.MENU.value

    def reset(self) -> "Session":
        """Regresa la sesión al menú y borra el flujo y las respuestas."""
        self.state = State.MENU.value
        self.flow = None
        self.answers = {}
        return self

    def enter(self, flow: Flow, state: State) -> "Session":
        self.flow = flow.value
        self.state = state.value
        return self

    @property
    def phone_number(self) -> str:
        """Número del remitente sin el prefijo del canal ("whatsapp:+506..." -> "+506...")."""
        return self.user_id.replace("whatsapp:", "")
