from .repair_flow import RepairFlow
from .pricing import estimate_repair_price

__all__ = ["RepairFlow", "estimate_repair_price"]
