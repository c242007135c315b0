"""Centralized style constants and display labels for report output."""

from __future__ import annotations

# ── Palette (hex strings) ────────────────────────────────────────────
# Kept as plain hex so the surface can convert to whatever color object
# the rendering library requires (e.g. reportlab HexColor).

TEXT_COLOR = "#111827"
MUTED_TEXT_COLOR = "#64748B"
ACCENT_COLOR = "#6366F1"
KPI_HEADER_COLOR = "#4F46E5"
EXPENSE_HEADER_COLOR = "#4B44E0"
HEADER_TEXT_COLOR = "#FFFFFF"
LETTERHEAD_BG_COLOR = "#F8FAFF"
LETTERHEAD_RULE_COLOR = "#E0E7FF"
GRID_COLOR = "#CBD5E1"
ALT_ROW_COLOR = "#F8FAFC"

# ── Type sizes (points) ──────────────────────────────────────────────

TITLE_SIZE = 15
SUBTITLE_SIZE = 14
SECTION_TITLE_SIZE = 12
BODY_SIZE = 10
FOOTER_SIZE = 8.5

# ── Status / priority display names ──────────────────────────────────

TICKET_STATUS_LABELS: dict[str, str] = {
    "abierto": "Abierto",
    "en_progreso": "En progreso",
    "cerrado": "Cerrado",
}

TICKET_PRIORITY_LABELS: dict[str, str] = {
    "baja": "Baja",
    "media": "Media",
    "alta": "Alta",
}

APPOINTMENT_STATUS_LABELS: dict[str, str] = {
    "pending": "Pendiente",
    "completed": "Completada",
    "cancelled": "Cancelada",
    "in_progress": "En Progreso",
}

CONTRACT_STATUS_LABELS: dict[str, str] = {
    "active": "Activo",
    "pending": "Pendiente",
    "expired": "Vencido",
    "cancelled": "Cancelado",
}

COST_STATUS_LABELS: dict[str, str] = {
    "paid": "Pagado",
    "pending": "Pendiente",
}


def label_for(value: str | None, labels: dict[str, str], missing: str = "No especificado") -> str:
    """Display name for a raw status key; unknown keys pass through, empty ones get *missing*."""
    if not value:
        return missing
    return labels.get(value, value)
