"""
Rate limiting de los endpoints de escritura usando slowapi.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import get_settings

settings = get_settings()

# Con RATE_LIMIT_ENABLED=false (por ejemplo, en tests) el limiter no hace nada
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# Uso: @write_limit debajo del decorador de la ruta; el endpoint necesita `request: Request`
write_limit = limiter.limit(settings.write_rate_limit)
