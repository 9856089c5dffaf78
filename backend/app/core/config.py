from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.strings import get_string

DEFAULT_JWT_SECRET = "change-me-in-production-course-recent"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./course_recent.db"
    environment: str = "development"
    allowed_origins: str = ""
    wwwroot: str = ""  # prefijo para los enlaces a cursos y ajustes

    # --- Bloque Recent Courses (configuración global) ---
    course_recent_default: int = Field(5, title=get_string("default_max"), description=get_string("default_max_desc"))
    course_recent_musthaverole: bool = Field(
        False, title=get_string("musthaverole"), description=get_string("musthaverole_desc")
    )

    # --- Auth ---
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 480  # 8 horas
    allow_insecure_jwt_secret: bool = False
    allow_public_register: bool = False
    create_default_admin_on_boot: bool = True
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"
    default_admin_email: str = "admin@example.com"
    default_admin_full_name: str = "Administrador"

    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = 0.0
    enable_prometheus_metrics: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_default_jwt_secret(self) -> bool:
        return self.jwt_secret.strip() == DEFAULT_JWT_SECRET

    def get_cors_origins(self) -> list[str]:
        """Lista de origins permitidos. Vacío en producción, '*' en desarrollo."""
        if self.allowed_origins and self.allowed_origins.strip():
            lista = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
            if lista:
                return lista
        if self.is_production:
            return []
        return ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
