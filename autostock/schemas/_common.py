"""Utilidades comunes de esquemas / Shared schema helpers."""


def blank_to_none(value):
    """Los textos vacios del formulario se guardan como null / Blank form strings become null."""
    if isinstance(value, str) and not value.strip():
        return None
    return value

