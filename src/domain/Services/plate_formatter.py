# src/domain/Services/plate_formatter.py
import re

_SEPARATORS = re.compile(r"[\s\-]")

# Formas válidas de placa (Perú): auto, taxi, moto
_CANONICAL = re.compile(r"[A-Z]{3}[0-9]{3}")
_VALID_SHAPES = (
    _CANONICAL,
    re.compile(r"[A-Z][0-9]{5}"),
    re.compile(r"[A-Z]{2}[0-9]{4}"),
)


def strip_plate(plate: str) -> str:
    """Quita espacios/guiones y pasa a mayúsculas."""
    return _SEPARATORS.sub("", plate or "").upper()


def validate_format(plate: str) -> bool:
    """
    True si la placa (sin separadores) tiene exactamente una de las formas
    3 letras + 3 dígitos, 1 letra + 5 dígitos o 2 letras + 4 dígitos.
    """
    clean = strip_plate(plate)
    return any(p.fullmatch(clean) for p in _VALID_SHAPES)


def format_plate(plate: str) -> str:
    """
    Formato canónico: sólo la forma 3L3D recibe guion (ABC123 -> ABC-123).
    El resto se devuelve sin separadores y en mayúsculas. Idempotente.
    """
    clean = strip_plate(plate)
    if _CANONICAL.fullmatch(clean):
        return f"{clean[:3]}-{clean[3:]}"
    return clean
