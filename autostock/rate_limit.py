"""Rate limiting global / Global rate limiter.

Usa slowapi para limitar las subidas de archivos por IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
