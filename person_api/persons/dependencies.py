import logging
from typing import Annotated

from fastapi import Depends

from person_api.database import Database, get_database
from person_api.persons.service import PersonService
# Importer l'interface et l'implémentation du Repository
from person_api.persons.interfaces.repositories import AbstractPersonRepository
from person_api.persons.repositories import SQLAlchemyPersonRepository

logger = logging.getLogger(__name__)

# Dependency for the application Database
DatabaseDep = Annotated[Database, Depends(get_database)]

# --- Dépendance pour le Repository ---
def get_person_repository(database: DatabaseDep) -> AbstractPersonRepository:
    """
    Fournit une instance du repository de personnes.
    """
    logger.debug("Providing SQLAlchemyPersonRepository")
    return SQLAlchemyPersonRepository(database=database)

PersonRepositoryDep = Annotated[AbstractPersonRepository, Depends(get_person_repository)]

# --- Dépendance Service Person ---
def get_person_service(repository: PersonRepositoryDep) -> PersonService:
    """
    Fournit une instance du service de gestion des personnes.

    Args:
        repository: Instance du repository de personnes.

    Returns:
        PersonService: Instance du service de gestion des personnes.
    """
    return PersonService(repository=repository)

PersonServiceDep = Annotated[PersonService, Depends(get_person_service)]
