import logging
from typing import List, Optional

# Importer l'interface du repository
from .interfaces.repositories import AbstractPersonRepository
from .config import MAX_PERSON_ID
from .models import Person, PersonDeleted, PersonPatch, PersonPayload
from .constants import (
    ERROR_AGE_FORMAT,
    ERROR_AGE_POSITIVE,
    ERROR_DEPARTMENT_NAME_REQUIRED,
    ERROR_EMAIL_EMPTY,
    ERROR_EMAIL_FORMAT,
    ERROR_NAME_EMPTY,
    ERROR_NOM_EMPTY,
    ERROR_NO_FIELDS,
    ERROR_NO_VALID_FIELDS,
    ERROR_PATCH_DATE_FORMAT,
    ERROR_PRENOM_EMPTY,
    ERROR_SEARCH_NAME_REQUIRED,
    MESSAGE_PERSON_DELETED,
)
# Importer les exceptions spécifiques
from .exceptions import (
    DuplicateEmailError,
    PersonNotFoundError,
    PersonValidationError,
)
from .utils import as_int, as_text, is_blank, is_valid_date, is_valid_email, validate_person_payload

logger = logging.getLogger(__name__)

# Champs libres, une valeur null les efface
FREE_TEXT_FIELDS = ("telephone", "poste", "departement")


class PersonService:
    """Service applicatif pour la gestion des personnes via Repository."""

    def __init__(self, repository: AbstractPersonRepository):
        self.repository = repository
        logger.debug("PersonService initialized with repository.")

    # --- Lectures ---

    async def list_persons(self) -> List[Person]:
        logger.debug("[PersonService] List Persons")
        return await self.repository.find_all()

    async def list_persons_paginated(self, page: int, page_size: int) -> List[Person]:
        logger.debug(f"[PersonService] List Persons: page={page}, page_size={page_size}")
        return await self.repository.find_with_pagination(page=page, page_size=page_size)

    async def get_person(self, person_id: int) -> Person:
        """Récupère une personne par ID, lève PersonNotFoundError si absente."""
        logger.debug(f"[PersonService] Get Person ID: {person_id}")
        if abs(person_id) > MAX_PERSON_ID:
            # Hors de la plage des identifiants: ne peut pas exister en base
            raise PersonNotFoundError(person_id)
        person = await self.repository.find_by_id(person_id)
        if person is None:
            raise PersonNotFoundError(person_id)
        return person

    async def search_by_name(self, name: Optional[str]) -> List[Person]:
        if is_blank(name):
            raise PersonValidationError(ERROR_SEARCH_NAME_REQUIRED, field="name")
        logger.debug(f"[PersonService] Search Persons by name: {name}")
        return await self.repository.find_by_name(name)

    async def search_by_departement(self, departement: Optional[str]) -> List[Person]:
        if is_blank(departement):
            raise PersonValidationError(ERROR_DEPARTMENT_NAME_REQUIRED, field="name")
        logger.debug(f"[PersonService] Search Persons by departement: {departement}")
        return await self.repository.find_by_departement(departement)

    async def count_persons(self, departement: Optional[str] = None) -> int:
        if departement is None:
            return await self.repository.count()
        return await self.repository.count_by_departement(departement)

    async def list_departements(self) -> List[str]:
        return await self.repository.get_all_departements()

    async def list_postes(self) -> List[str]:
        return await self.repository.get_all_postes()

    # --- Écritures ---

    async def create_person(self, person_data: Optional[PersonPayload]) -> Person:
        """Valide puis crée une nouvelle personne; l'email doit être libre."""
        self._check_payload(person_data)
        logger.info(f"[PersonService] Create Person: {person_data.email}")

        if await self.repository.exists_by_email(person_data.email):
            logger.warning(f"[PersonService] Email already used: {person_data.email}")
            raise DuplicateEmailError(person_data.email)

        created = await self.repository.create(person_data)
        logger.info(f"[PersonService] Person ID {created.id} created.")
        return created

    async def replace_person(self, person_id: int, person_data: Optional[PersonPayload]) -> Person:
        """
        Remplacement complet (PUT).

        Tous les champs modifiables sont remplacés par ceux du corps: un champ
        optionnel absent devient null, il ne conserve pas l'ancienne valeur.
        """
        logger.info(f"[PersonService] Replace Person ID: {person_id}")
        existing = await self.get_person(person_id)
        self._check_payload(person_data)

        if person_data.email.lower() != existing.email.lower():
            await self._ensure_email_available(person_data.email, person_id)

        return await self._apply(person_id, person_data.model_dump())

    async def patch_person(self, person_id: int, patch: Optional[PersonPatch]) -> Person:
        """
        Mise à jour partielle (PATCH).

        Chaque champ présent est validé indépendamment; rien n'est écrit tant
        qu'un des champs fournis est invalide.
        """
        logger.info(f"[PersonService] Patch Person ID: {person_id}")
        existing = await self.get_person(person_id)

        if patch is None or patch.is_empty:
            raise PersonValidationError(ERROR_NO_FIELDS)

        provided = patch.provided_fields
        values = {}

        if "name" in provided:
            values["name"] = self._required_text(patch.name, "name", ERROR_NAME_EMPTY)

        if "age" in provided:
            try:
                age = as_int(patch.age)
            except (ValueError, OverflowError) as e:
                raise PersonValidationError(ERROR_AGE_FORMAT, field="age") from e
            if age is None or age <= 0:
                raise PersonValidationError(ERROR_AGE_POSITIVE, field="age")
            values["age"] = age

        if "nom" in provided:
            values["nom"] = self._required_text(patch.nom, "nom", ERROR_NOM_EMPTY)

        if "prenom" in provided:
            values["prenom"] = self._required_text(patch.prenom, "prenom", ERROR_PRENOM_EMPTY)

        if "email" in provided:
            email = as_text(patch.email)
            if is_blank(email):
                raise PersonValidationError(ERROR_EMAIL_EMPTY, field="email")
            if not is_valid_email(email):
                raise PersonValidationError(ERROR_EMAIL_FORMAT, field="email")
            if email.lower() != existing.email.lower():
                await self._ensure_email_available(email, person_id)
            values["email"] = email

        for field_name in FREE_TEXT_FIELDS:
            if field_name in provided:
                values[field_name] = as_text(getattr(patch, field_name))

        if "dateEmbauche" in provided:
            date_value = as_text(patch.dateEmbauche)
            if is_blank(date_value):
                values["dateEmbauche"] = None
            elif not is_valid_date(date_value):
                raise PersonValidationError(ERROR_PATCH_DATE_FORMAT, field="dateEmbauche")
            else:
                values["dateEmbauche"] = date_value

        if not values:
            raise PersonValidationError(ERROR_NO_VALID_FIELDS)

        return await self._apply(person_id, values)

    async def delete_person(self, person_id: int) -> PersonDeleted:
        logger.info(f"[PersonService] Delete Person ID: {person_id}")
        await self.get_person(person_id)
        deleted = await self.repository.delete(person_id)
        if not deleted:
            # Supprimée entre la vérification et la transaction
            raise PersonNotFoundError(person_id)
        logger.info(f"[PersonService] Person ID {person_id} deleted.")
        return PersonDeleted(message=MESSAGE_PERSON_DELETED, id=str(person_id))

    # --- Helpers ---

    @staticmethod
    def _required_text(value, field_name: str, message: str) -> str:
        text = as_text(value)
        if is_blank(text):
            raise PersonValidationError(message, field=field_name)
        return text

    @staticmethod
    def _check_payload(person_data: Optional[PersonPayload]) -> None:
        error = validate_person_payload(person_data)
        if error is not None:
            logger.warning(f"[PersonService] Invalid person data: {error}")
            raise PersonValidationError(error)

    async def _ensure_email_available(self, email: str, person_id: int) -> None:
        if await self.repository.exists_by_email_excluding_id(email, person_id):
            logger.warning(f"[PersonService] Email already used by another person: {email}")
            raise DuplicateEmailError(email)

    async def _apply(self, person_id: int, values: dict) -> Person:
        updated = await self.repository.update(person_id, values)
        if updated is None:
            raise PersonNotFoundError(person_id)
        logger.info(f"[PersonService] Person ID {person_id} updated.")
        return updated
