"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> vitrina/ -> src/ -> raíz del proyecto
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend de almacenamiento
    store_backend: Literal["memory", "supabase"] = Field(
        "memory", description="Backend de stores: 'memory' o 'supabase'"
    )
    listings_seed_file: Optional[str] = Field(
        None, description="JSON con listings iniciales para el backend en memoria"
    )

    # Supabase
    supabase_url: Optional[str] = Field(None, description="URL del proyecto Supabase")
    supabase_key: Optional[str] = Field(None, description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )

    # Tablas
    listings_table: str = Field("listings", description="Tabla de propiedades")
    saved_table: str = Field(
        "saved_properties", description="Tabla de propiedades guardadas"
    )
    presets_table: str = Field("filter_presets", description="Tabla de presets de filtros")

    # Reintentos del store remoto
    store_retry_attempts: int = Field(
        3, ge=1, description="Intentos por request contra el store remoto"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Delimitadores del formato de presets (frontera bit-exacta con el store)
PRESET_RANGE_SEPARATOR = "-"
PRESET_LIST_DELIMITER = ","
