import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Body, HTTPException, Path, Query, status

from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .constants import (
    CONTEXT_COUNT,
    CONTEXT_CREATE,
    CONTEXT_DELETE,
    CONTEXT_LOOKUP,
    CONTEXT_RETRIEVE_ALL,
    CONTEXT_RETRIEVE_ONE,
    CONTEXT_SEARCH_DEPARTMENT,
    CONTEXT_SEARCH_NAME,
    CONTEXT_UPDATE,
)
from .dependencies import PersonServiceDep
from .exceptions import PersonError, PersonNotFoundError
from .models import PersonCount, PersonDeleted, PersonPatch, PersonPayload, PersonRead

logger = logging.getLogger(__name__)

# --- Router Definition ---
router = APIRouter()


# --- Error Handling Helper ---
def handle_person_service_errors(e: Exception, context: str) -> NoReturn:
    """
    Traduit une exception du service en HTTPException.

    Introuvable -> 404. Toute autre erreur, métier ou inattendue, -> 400:
    les clients existants dépendent de ce code, même pour un échec interne.
    """
    if isinstance(e, PersonNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, PersonError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Person API] Unexpected error ({context}): {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{context}: {e}")


# --- Person Endpoints --- #

@router.get("", response_model=List[PersonRead], summary="Lister toutes les personnes")
async def list_persons(service: PersonServiceDep):
    """Toutes les personnes, les plus récentes d'abord."""
    logger.info("API list_persons")
    try:
        return await service.list_persons()
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_RETRIEVE_ALL)


@router.get("/search", response_model=List[PersonRead], summary="Rechercher par nom")
async def search_persons_by_name(
    service: PersonServiceDep,
    name: Optional[str] = Query(None)
):
    """Recherche insensible à la casse dans name, nom et prenom."""
    logger.info(f"API search_persons_by_name: name={name}")
    try:
        return await service.search_by_name(name)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_SEARCH_NAME)


@router.get("/department", response_model=List[PersonRead], summary="Rechercher par département")
async def search_persons_by_department(
    service: PersonServiceDep,
    name: Optional[str] = Query(None)
):
    logger.info(f"API search_persons_by_department: name={name}")
    try:
        return await service.search_by_departement(name)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_SEARCH_DEPARTMENT)


@router.get("/count", response_model=PersonCount, summary="Compter les personnes")
async def count_persons(
    service: PersonServiceDep,
    departement: Optional[str] = Query(None)
):
    """Nombre total de personnes, ou d'un département si `departement` est fourni."""
    logger.info(f"API count_persons: departement={departement}")
    try:
        return PersonCount(count=await service.count_persons(departement=departement))
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_COUNT)


@router.get("/paginated", response_model=List[PersonRead], summary="Lister les personnes par page")
async def list_persons_paginated(
    service: PersonServiceDep,
    page: int = Query(DEFAULT_PAGE, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize")
):
    """Pages numérotées à partir de 1; une page hors limites est vide."""
    logger.info(f"API list_persons_paginated: page={page}, pageSize={page_size}")
    try:
        return await service.list_persons_paginated(page=page, page_size=page_size)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_RETRIEVE_ALL)


@router.get("/departements", response_model=List[str], summary="Lister les départements")
async def list_departements(service: PersonServiceDep):
    try:
        return await service.list_departements()
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_LOOKUP)


@router.get("/postes", response_model=List[str], summary="Lister les postes")
async def list_postes(service: PersonServiceDep):
    try:
        return await service.list_postes()
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_LOOKUP)


@router.get("/{person_id}", response_model=PersonRead, summary="Récupérer une personne par ID")
async def get_person(
    service: PersonServiceDep,
    person_id: int = Path(...)
):
    logger.info(f"API get_person: ID={person_id}")
    try:
        return await service.get_person(person_id)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_RETRIEVE_ONE)


@router.post("", response_model=PersonRead, status_code=status.HTTP_201_CREATED, summary="Créer une personne")
async def create_person(
    service: PersonServiceDep,
    person: Optional[PersonPayload] = Body(None)
):
    """Crée une personne; un `id` présent dans le corps est ignoré."""
    logger.info(f"API create_person: email={person.email if person else None}")
    try:
        return await service.create_person(person)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_CREATE)


@router.put("/{person_id}", response_model=PersonRead, summary="Remplacer une personne")
async def replace_person(
    service: PersonServiceDep,
    person_id: int = Path(...),
    person: Optional[PersonPayload] = Body(None)
):
    logger.info(f"API replace_person: ID={person_id}")
    try:
        return await service.replace_person(person_id, person)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_UPDATE)


@router.patch("/{person_id}", response_model=PersonRead, summary="Mettre à jour partiellement une personne")
async def patch_person(
    service: PersonServiceDep,
    person_id: int = Path(...),
    updates: Optional[PersonPatch] = Body(None)
):
    logger.info(f"API patch_person: ID={person_id}")
    try:
        return await service.patch_person(person_id, updates)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_UPDATE)


@router.delete("/{person_id}", response_model=PersonDeleted, summary="Supprimer une personne")
async def delete_person(
    service: PersonServiceDep,
    person_id: int = Path(...)
):
    logger.info(f"API delete_person: ID={person_id}")
    try:
        return await service.delete_person(person_id)
    except Exception as e:
        handle_person_service_errors(e, CONTEXT_DELETE)
