"""
Textos fijos del bot: menú principal, listas y respuestas genéricas.
"""

from typing import List

from app.core.catalog import Branch, Catalog

MENU_FOOTER = "ESCRIBE: *MENU* para volver aquí en cualquier momento."


def format_colones(amount: int) -> str:
    """12000 -> "₡12.000"."""
    return f"₡{amount:,}".replace(",", ".")


def main_menu() -> str:
    return (
        "🖥️ *MPC JSALA - Menú Principal*\n\n"
        "Selecciona una opción (escribe el número):\n"
        "1️⃣ Reparación de computadoras\n"
        "2️⃣ Mantenimiento de computadoras\n"
        "3️⃣ Otros servicios\n"
        "4️⃣ Sucursales / Ubicaciones\n"
        "5️⃣ Agenda una cita\n"
        "6️⃣ Precios / Productos\n"
        "7️⃣ Estado de mi equipo o cita\n"
        "8️⃣ Consulta técnica rápida\n"
        "9️⃣ Hablar con un asesor\n"
        f"{MENU_FOOTER}"
    )


def welcome() -> str:
    return f"¡Hola! 👋 Soy el asistente de MPC Jsala.\n\n{main_menu()}"


def invalid_option() -> str:
    return f"❌ Opción inválida.\n\n{main_menu()}"


def restart() -> str:
    return f"😅 Algo salió mal con tu conversación. Empecemos de nuevo.\n\n{main_menu()}"


def generic_fallback() -> str:
    return (
        "🤖 Lo siento, no entendí completamente. Puedes escribir *MENU* para ver opciones "
        "o *AI <tu pregunta>* para usar asistencia inteligente.\n\n"
        f"{main_menu()}"
    )


def processing_error() -> str:
    return "Lo siento, hubo un error procesando tu mensaje. Por favor intenta de nuevo o escribe *MENU*."


def branch_list(branches: List[Branch]) -> str:
    text = "🏢 *Sucursales disponibles:*\n\n"
    for i, b in enumerate(branches, 1):
        text += f"{i}. {b.name} - {b.address} - Horario: {b.hours}\n"
    text += "\nEscribe el número de la sucursal para elegirla."
    return text


def branch_details(branch: Branch) -> str:
    return (
        f"*{branch.name}*\n\n"
        f"📍 Dirección: {branch.address}\n"
        f"📞 Teléfono: {branch.phone}\n"
        f"🕒 Horario: {branch.hours}"
    )


def prices_text(catalog: Catalog) -> str:
    prices = catalog.prices
    text = "💲 *Precios principales*\n\n"
    text += f"• Reparación (mínimo): {format_colones(prices.reparacion_minima)}\n"
    text += f"• Formateo e instalación: {format_colones(prices.formateo)}\n"
    text += f"• Mantenimiento (limpieza + diagnóstico): {format_colones(prices.limpieza)}\n"
    text += f"• Cambio de pasta térmica: {format_colones(prices.pasta_termica)}\n\n"
    text += "📦 *Inventario disponible:*\n"
    for item in catalog.inventory.values():
        text += f"- {item.name}: {format_colones(item.price)} (stock: {item.stock})\n"
    return text
