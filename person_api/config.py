import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Charger les variables d'environnement AVANT de définir la classe Settings
load_dotenv()


# Classe de configuration utilisant Pydantic BaseSettings
class Settings(BaseSettings):
    # --- Application ---
    APP_TITLE: str = "Person API"
    APP_VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # --- Base de Données ---
    # DATABASE_URL prime sur les variables POSTGRES_* quand elle est définie
    DATABASE_URL: Optional[str] = None
    POSTGRES_DB: str = "persons"
    POSTGRES_USER: str = "person"
    POSTGRES_PASSWORD: str = "person"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    DB_ECHO_LOG: bool = False
    # Pas de migrations: les tables sont créées au démarrage si absentes
    CREATE_TABLES_ON_STARTUP: bool = True

    class Config:
        # Charger depuis les variables d'environnement (respecte load_dotenv)
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignorer les variables d'env non définies dans le modèle

    @property
    def database_url(self) -> str:
        """URL SQLAlchemy (async) de la base de données."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


# Instancier la classe de configuration
settings = Settings()

logger.info(
    f"Configuration chargée: DB={settings.DATABASE_URL or settings.POSTGRES_DB}@{settings.POSTGRES_HOST}, "
    f"prefix={settings.API_V1_PREFIX}"
)
