from .consult_flow import ConsultFlow
from .remote_classifier import is_remote_candidate

__all__ = ["ConsultFlow", "is_remote_candidate"]
