import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
# Importer SQLModel pour utiliser ses métadonnées
from sqlmodel import SQLModel

from person_api.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Fabrique de sessions de l'application.

    Possède le moteur SQLAlchemy asynchrone et la factory de sessions pendant
    toute la vie du processus. Elle est construite au démarrage (lifespan FastAPI)
    et libérée explicitement par `close()` à l'arrêt.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo}
        self._session_guard = nullcontext()
        if url.startswith("sqlite") and ":memory:" in url:
            # Une base SQLite en mémoire n'existe que sur une seule connexion:
            # deux transactions concurrentes s'y mélangeraient
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
            self._session_guard = asyncio.Lock()

        # Créer le moteur de base de données asynchrone
        self.engine: Optional[AsyncEngine] = create_async_engine(url, **engine_kwargs)

        # Créer une classe de session asynchrone
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,  # Empêche les objets d'expirer après commit
        )
        logger.info("Moteur et Session Factory SQLAlchemy Async configurés.")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.DB_ECHO_LOG)

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Ouvre une session pour une seule opération et la ferme inconditionnellement."""
        if not self.is_open:
            logger.error("La factory de session SQLAlchemy n'est pas initialisée.")
            raise RuntimeError("Database session factory is not initialized.")

        async with self._session_guard:
            session = self.session_factory()
            try:
                yield session
            finally:
                await session.close()
                logger.debug("Session DB fermée.")

    async def create_tables(self) -> None:
        """Crée toutes les tables définies par les modèles SQLModel."""
        # Import local pour enregistrer les tables dans les métadonnées
        from person_api.persons import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_tables(self) -> None:
        """Supprime toutes les tables définies par les modèles SQLModel."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Moteur SQLAlchemy libéré.")


# Fonction dépendance pour obtenir la fabrique de sessions de l'application
def get_database(request: Request) -> Database:
    """FastAPI dependency that provides the application-wide Database."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        logger.error("Aucune base de données attachée à app.state.")
        raise RuntimeError("Database is not initialized.")
    return database
