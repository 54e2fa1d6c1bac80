"""
Module principal de l'application FastAPI Person API.

Ce module configure et initialise l'instance FastAPI: cycle de vie de la
base de données, middleware CORS, gestionnaires d'erreurs et routeur des
personnes.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from person_api.config import Settings, settings as default_settings
from person_api.core.cors import SimpleCORSMiddleware
from person_api.core.errors import register_exception_handlers
from person_api.database import Database
from person_api.persons.config import PERSONS_PATH
from person_api.persons.router import router as person_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Construit l'application.

    Si `database` est fourni, l'appelant en reste propriétaire: il n'est ni
    initialisé ni fermé par le cycle de vie de l'application.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = getattr(app.state, "database", None) is None
        if owned:
            app.state.database = Database.from_settings(settings)
            if settings.CREATE_TABLES_ON_STARTUP:
                await app.state.database.create_tables()
        logger.info("Person API démarrée.")
        yield
        if owned:
            await app.state.database.close()
            app.state.database = None
        logger.info("Person API arrêtée.")

    app = FastAPI(
        title=settings.APP_TITLE,
        description="API de gestion des personnes (employés).",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database

    # CORS permissif sur toutes les routes, preflight OPTIONS court-circuité
    app.add_middleware(SimpleCORSMiddleware)

    register_exception_handlers(app)

    # ======================================================
    # Inclure les routeurs
    # ======================================================
    app.include_router(person_router, prefix=PERSONS_PATH, tags=["Persons"])
    app.include_router(
        person_router,
        prefix=f"{settings.API_V1_PREFIX}{PERSONS_PATH}",
        tags=["Persons"],
        include_in_schema=False,
    )

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app


# Configurer le logging
logging.basicConfig(level=default_settings.LOG_LEVEL.upper())

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("person_api.main:app", host="0.0.0.0", port=8000, reload=False)
