from .appointment_flow import AppointmentFlow
from .data_formatter import DataFormatter

__all__ = ["AppointmentFlow", "DataFormatter"]
