from pydantic import BaseModel
import os
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "Animal API")
    env: str = os.getenv("APP_ENV", "dev")
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "palvelinohjelmointi")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    port: int = int(os.getenv("PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    rate_limit_enabled: bool = _env_bool("RATE_LIMIT_ENABLED", "true")
    write_rate_limit: str = os.getenv("WRITE_RATE_LIMIT", "60/minute")
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
