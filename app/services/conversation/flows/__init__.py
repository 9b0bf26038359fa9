"""
Módulo de flujos de conversación para el bot de WhatsApp.

Cada flujo es una tabla independiente de pasos sobre el mismo motor:
- Flujos complejos: En carpetas separadas (appointment/, repair/, consult/)
- Flujos simples: Archivos individuales

Uso:
    from app.services.conversation.flows import build_flows
"""

from typing import Dict

# ================================
# CLASE BASE
# ================================
from .base_flow import BaseFlow, FlowContext, FlowResult, Step

# ================================
# FLUJOS COMPLEJOS (en carpetas)
# ================================
from .appointment import AppointmentFlow
from .repair import RepairFlow
from .consult import ConsultFlow

# ================================
# FLUJOS SIMPLES (archivos individuales)
# ================================
from .maintenance_flow import MaintenanceFlow
from .other_services_flow import OtherServicesFlow
from .branches_flow import BranchesFlow
from .status_flow import StatusFlow
from .advisor_flow import AdvisorFlow

__all__ = [
    "BaseFlow",
    "FlowContext",
    "FlowResult",
    "Step",
    "AppointmentFlow",
    "RepairFlow",
    "ConsultFlow",
    "MaintenanceFlow",
    "OtherServicesFlow",
    "BranchesFlow",
    "StatusFlow",
    "AdvisorFlow",
    "build_flows",
]


def build_flows() -> Dict[str, BaseFlow]:
    """Instancia todos los flujos indexados por el valor de `Flow`."""
    appointment = AppointmentFlow()
    flows = [
        RepairFlow(),
        MaintenanceFlow(appointment),
        OtherServicesFlow(),
        BranchesFlow(),
        appointment,
        StatusFlow(),
        ConsultFlow(),
        AdvisorFlow(),
    ]
    return {flow.flow.value: flow for flow in flows}
