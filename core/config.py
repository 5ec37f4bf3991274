"""
⚙️ Configuration Management
Gestion centralisée de la configuration du moteur génétique
"""

from pathlib import Path
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration principale du moteur génétique"""

    model_config = SettingsConfigDict(
        env_prefix="GENETIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environnement
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Base de projet
    project_name: str = "genetic-engine"
    version: str = "0.1.0"

    # Logging
    logs_dir: Path = Field(default_factory=lambda: Path.cwd() / "logs")
    log_to_file: bool = Field(default=False)
    log_json: bool = Field(default=False)

    # Simulation
    random_seed: Optional[int] = Field(default=None)
    history_size: int = Field(default=1000, gt=0)

    @field_validator("logs_dir")
    @classmethod
    def ensure_path_absolute(cls, v):
        """S'assure que les chemins sont absolus"""
        if isinstance(v, str):
            v = Path(v)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Valide le niveau de log"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    def is_production(self) -> bool:
        """Vérifie si on est en production"""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Vérifie si on est en développement"""
        return self.environment.lower() == "development"

    def is_testing(self) -> bool:
        """Vérifie si on est en mode test"""
        return self.environment.lower() == "testing"


@lru_cache()
def get_settings() -> Settings:
    """
    Retourne l'instance de configuration (singleton)
    Utilise lru_cache pour éviter de recharger à chaque appel
    """
    return Settings()
