"""Nombres de archivo seguros para el almacenamiento / Safe blob file names."""

import re
from pathlib import PurePosixPath, PureWindowsPath

MAX_FILENAME_LENGTH = 120
FALLBACK_FILENAME = "documento"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str | None) -> str:
    """Reducir un nombre subido a un componente de ruta seguro / Reduce an uploaded name to a safe path part.

    Se descarta cualquier directorio (POSIX o Windows), los caracteres fuera de
    [A-Za-z0-9._-] pasan a "_" y se quitan los puntos iniciales.
    """
    if not filename:
        return FALLBACK_FILENAME
    name = PureWindowsPath(PurePosixPath(filename).name).name
    name = _UNSAFE_CHARS.sub("_", name).lstrip(".")
    if len(name) > MAX_FILENAME_LENGTH:
        stem, dot, suffix = name.rpartition(".")
        if dot and len(suffix) < 10:
            name = stem[: MAX_FILENAME_LENGTH - len(suffix) - 1] + "." + suffix
        else:
            name = name[:MAX_FILENAME_LENGTH]
    return name or FALLBACK_FILENAME
