from typing import Iterable, Tuple

from app.core.keywords import REPAIR_SURCHARGES, contains_any

Surcharges = Iterable[Tuple[Tuple[str, ...], int]]


def estimate_repair_price(problem: str, base_price: int, surcharges: Surcharges = REPAIR_SURCHARGES) -> int:
    """
    Estimado preliminar de una reparación.

    Parte del precio base y suma cada recargo cuyo grupo de palabras clave
    aparezca en la descripción del problema. Cada grupo suma una sola vez y el
    orden de los grupos no cambia el resultado.

    >>> estimate_repair_price("La pantalla parpadea", 12000)
    27000
    """
    estimate = base_price
    for keywords, amount in surcharges:
        if contains_any(problem, keywords):
            estimate += amount
    return estimate
