from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class Branch(BaseModel):
    """Sucursal del taller."""
    id: str
    name: str
    address: str
    phone: str
    hours: str


class InventoryItem(BaseModel):
    name: str
    price: int
    stock: int = 0


class Prices(BaseModel):
    """Tarifas base en colones."""
    reparacion_minima: int = 12000
    formateo: int = 20000
    limpieza: int = 15000
    pasta_termica: int = 8000


class Catalog(BaseModel):
    """Datos de solo lectura usados para textos informativos y estimados."""
    branches: List[Branch] = Field(default_factory=list)
    inventory: Dict[str, InventoryItem] = Field(default_factory=dict)
    prices: Prices = Field(default_factory=Prices)

    def branch_by_id(self, branch_id: Optional[str]) -> Optional[Branch]:
        return next((b for b in self.branches if b.id == branch_id), None)


DEFAULT_CATALOG = Catalog(
    branches=[
        Branch(
            id="sjo-centro",
            name="MPC Jsala - Sucursal Centro (San José)",
            address="Calle Principal #123, San José",
            phone="+50688898177",
            hours="Lun-Vie 8:00-17:00",
        ),
        Branch(
            id="palmares",
            name="MPC Jsala - Palmares",
            address="Av. Secundaria #45, Palmares",
            phone="+50688898178",
            hours="Lun-Sáb 9:00-15:00",
        ),
    ],
    inventory={
        "ssd-256": InventoryItem(name="SSD 256GB", price=35000, stock=5),
        "ram-8gb": InventoryItem(name="RAM 8GB DDR4", price=20000, stock=8),
    },
    prices=Prices(),
)


def default_catalog() -> Catalog:
    return DEFAULT_CATALOG.model_copy(deep=True)
