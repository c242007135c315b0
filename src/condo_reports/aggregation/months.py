"""Month labels for aggregate rows.

Grouping keys are always locale-neutral ``YYYY-MM``.  Display labels are
built in English and translated through a fixed lookup table at render time.
"""

from __future__ import annotations

from datetime import date

ENGLISH_MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MONTH_TRANSLATIONS: dict[str, str] = {
    "January": "Enero",
    "February": "Febrero",
    "March": "Marzo",
    "April": "Abril",
    "May": "Mayo",
    "June": "Junio",
    "July": "Julio",
    "August": "Agosto",
    "September": "Septiembre",
    "October": "Octubre",
    "November": "Noviembre",
    "December": "Diciembre",
}

# "01" -> "Enero"
MONTH_NAMES_BY_NUMBER: dict[str, str] = {
    f"{i:02d}": MONTH_TRANSLATIONS[name] for i, name in enumerate(ENGLISH_MONTHS, start=1)
}


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def localize_month_label(label: str) -> str:
    """Replace the first English month name in *label*; already-translated labels pass through."""
    if any(spanish in label for spanish in MONTH_TRANSLATIONS.values()):
        return label
    for english, spanish in MONTH_TRANSLATIONS.items():
        if english in label:
            return label.replace(english, spanish)
    return label


def month_key_label(key: str) -> str:
    """``"2024-03"`` -> ``"Marzo 2024"``. Malformed keys are returned unchanged."""
    year, _, month = key.partition("-")
    if not month.isdigit() or not 1 <= int(month) <= 12:
        return key
    english = ENGLISH_MONTHS[int(month) - 1]
    return localize_month_label(f"{english} {year}")
