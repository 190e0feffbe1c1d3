from datetime import time
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


class Settings(BaseSettings):
    """
    Configuración del motor de agendamiento utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    PROJECT_NAME: str = "Care Scheduling"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field("development", description="Entorno de ejecución")

    # Scheduling defaults (used when a professional has no configuration)
    DEFAULT_WORKING_DAYS: list[int] = Field(
        default=[1, 2, 3, 4, 5], description="Días laborables por defecto (0=domingo ... 6=sábado)"
    )
    DEFAULT_WORKING_START: str = Field("07:00", description="Hora de inicio por defecto (HH:MM)")
    DEFAULT_WORKING_END: str = Field("21:00", description="Hora de fin por defecto (HH:MM)")
    DEFAULT_CONSULTATION_MINUTES: int = Field(50, description="Duración de consulta por defecto en minutos")

    # Booking rules
    MIN_REASON_LENGTH: int = Field(10, description="Longitud mínima del motivo de la consulta")
    SCHEDULING_HORIZON_DAYS: int = Field(30, description="Días hacia adelante para buscar horarios libres")
    UPCOMING_WINDOW_DAYS: int = Field(7, description="Ventana por defecto para próximas consultas")

    # Side effects
    EVENT_DISPATCH_MODE: Literal["inline", "background"] = Field(
        "background", description="Ejecución de efectos secundarios: inline o background"
    )

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Nivel de log")
    LOG_FORMAT: Literal["colored", "json", "plain"] = Field("colored", description="Formato de log")
    LOG_FILE: str | None = Field(None, description="Archivo de log opcional (JSON)")

    # Database
    DB_URL: str = Field(
        "sqlite+aiosqlite:///./care_scheduling.db", description="URL async de SQLAlchemy"
    )
    DB_ECHO: bool = Field(False, description="Log SQL queries (solo para debug)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DEFAULT_WORKING_DAYS")
    @classmethod
    def validate_working_days(cls, v):
        if not v:
            raise ValueError("DEFAULT_WORKING_DAYS must not be empty")
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Invalid weekday {day}; expected 0 (Sunday) to 6 (Saturday)")
        return sorted(set(v))

    @field_validator("DEFAULT_WORKING_START", "DEFAULT_WORKING_END")
    @classmethod
    def validate_hhmm(cls, v):
        try:
            _parse_hhmm(v)
        except ValueError as e:
            raise ValueError(f"Expected HH:MM, got '{v}'") from e
        return v

    @field_validator("DEFAULT_CONSULTATION_MINUTES", "SCHEDULING_HORIZON_DAYS", "UPCOMING_WINDOW_DAYS")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be greater than 0")
        return v

    @field_validator("MIN_REASON_LENGTH")
    @classmethod
    def validate_reason_length(cls, v):
        if v < 0:
            raise ValueError("MIN_REASON_LENGTH must be 0 or greater")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @computed_field
    @property
    def default_working_start_time(self) -> time:
        return _parse_hhmm(self.DEFAULT_WORKING_START)

    @computed_field
    @property
    def default_working_end_time(self) -> time:
        return _parse_hhmm(self.DEFAULT_WORKING_END)

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.ENVIRONMENT.lower() in ["development", "dev", "local", "test"]


# Singleton para configuración
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Descarta la instancia cacheada (útil en tests)."""
    global _settings_instance
    _settings_instance = None
