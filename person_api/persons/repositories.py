# person_api/persons/repositories.py
import logging
from typing import List, Optional

from fastcrud import FastCRUD
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from person_api.database import Database
from person_api.persons.exceptions import (
    DuplicateEmailError,
    PersonCreationError,
    PersonDeletionError,
    PersonUpdateError,
)
from person_api.persons.interfaces.repositories import AbstractPersonRepository
from person_api.persons.models import Person, PersonPayload

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _contains_pattern(text: str) -> str:
    """Motif LIKE `%text%` où les jokers saisis par l'utilisateur sont littéraux."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


# Contraintes d'unicité de l'email: clé UNIQUE de la colonne (PostgreSQL, SQLite)
# et index fonctionnel sur lower(email)
EMAIL_UNIQUE_CONSTRAINTS = ("persons_email_key", "persons.email", "uq_persons_email_lower")


def _is_email_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique constraint" in message and any(name in message for name in EMAIL_UNIQUE_CONSTRAINTS)


class SQLAlchemyPersonRepository(AbstractPersonRepository):
    """
    Implémentation SQLAlchemy du repository des personnes.

    Chaque opération ouvre sa propre session et la ferme avant de retourner.
    Les écritures suivent le même protocole: begin -> mutation -> commit; en cas
    d'erreur, rollback si la transaction est encore active puis levée d'une
    exception de persistance décrivant l'opération.
    """

    def __init__(self, database: Database):
        self.database = database
        self.crud = FastCRUD(Person)

    # --- Lectures ---

    async def find_all(self) -> List[Person]:
        logger.debug("[PersonRepository] Listing all persons")
        async with self.database.session() as session:
            result = await session.execute(select(Person).order_by(Person.id.desc()))
            return list(result.scalars().all())

    async def find_by_id(self, person_id: int) -> Optional[Person]:
        logger.debug(f"[PersonRepository] Getting person by ID: {person_id}")
        async with self.database.session() as session:
            person = await session.get(Person, person_id)
            if not person:
                logger.debug(f"[PersonRepository] Person not found by ID: {person_id}")
            return person

    async def find_by_name(self, name: str) -> List[Person]:
        logger.debug(f"[PersonRepository] Searching persons by name: {name}")
        pattern = _contains_pattern(name)
        query = (
            select(Person)
            .where(
                or_(
                    Person.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Person.nom.ilike(pattern, escape=LIKE_ESCAPE),
                    Person.prenom.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Person.id.desc())
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def find_by_departement(self, departement: str) -> List[Person]:
        logger.debug(f"[PersonRepository] Getting persons by departement: {departement}")
        query = select(Person).where(Person.departement == departement).order_by(Person.id.desc())
        async with self.database.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def exists_by_email(self, email: str) -> bool:
        async with self.database.session() as session:
            return await self._count_email(session, email) > 0

    async def exists_by_email_excluding_id(self, email: str, exclude_id: int) -> bool:
        async with self.database.session() as session:
            return await self._count_email(session, email, exclude_id=exclude_id) > 0

    async def _count_email(self, session: AsyncSession, email: str, exclude_id: Optional[int] = None) -> int:
        query = select(func.count()).select_from(Person).where(func.lower(Person.email) == func.lower(email))
        if exclude_id is not None:
            query = query.where(Person.id != exclude_id)
        result = await session.execute(query)
        return result.scalar_one()

    async def count(self) -> int:
        async with self.database.session() as session:
            return await self.crud.count(db=session)

    async def count_by_departement(self, departement: str) -> int:
        async with self.database.session() as session:
            return await self.crud.count(db=session, departement=departement)

    async def get_all_departements(self) -> List[str]:
        query = (
            select(Person.departement)
            .where(Person.departement.is_not(None))
            .distinct()
            .order_by(Person.departement)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_all_postes(self) -> List[str]:
        query = (
            select(Person.poste)
            .where(Person.poste.is_not(None))
            .distinct()
            .order_by(Person.poste)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def find_with_pagination(self, page: int, page_size: int) -> List[Person]:
        logger.debug(f"[PersonRepository] Listing persons: page={page}, page_size={page_size}")
        query = (
            select(Person)
            .order_by(Person.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    # --- Écritures transactionnelles ---

    async def create(self, person_data: PersonPayload) -> Person:
        logger.debug(f"[PersonRepository] Creating person: {person_data.email}")
        async with self.database.session() as session:
            try:
                person = Person(**person_data.model_dump())
                session.add(person)
                await session.commit()
                return person
            except IntegrityError as e:
                await self._rollback(session)
                logger.warning(f"[PersonRepository] Integrity error creating person {person_data.email}: {e}")
                if _is_email_violation(e):
                    raise DuplicateEmailError(person_data.email) from e
                raise PersonCreationError(e) from e
            except Exception as e:
                await self._rollback(session)
                logger.error(f"[PersonRepository] Unexpected error creating person {person_data.email}: {e}", exc_info=True)
                raise PersonCreationError(e) from e

    async def update(self, person_id: int, values: dict) -> Optional[Person]:
        logger.debug(f"[PersonRepository] Updating person ID: {person_id} fields={sorted(values)}")
        async with self.database.session() as session:
            try:
                person = await session.get(Person, person_id)
                if person is None:
                    await session.commit()
                    return None
                for field_name, value in values.items():
                    setattr(person, field_name, value)
                await session.commit()
                return person
            except IntegrityError as e:
                await self._rollback(session)
                logger.warning(f"[PersonRepository] Integrity error updating person {person_id}: {e}")
                if _is_email_violation(e):
                    raise DuplicateEmailError(values.get("email", "<unknown>")) from e
                raise PersonUpdateError(e) from e
            except Exception as e:
                await self._rollback(session)
                logger.error(f"[PersonRepository] Error updating person {person_id}: {e}", exc_info=True)
                raise PersonUpdateError(e) from e

    async def delete(self, person_id: int) -> bool:
        logger.debug(f"[PersonRepository] Deleting person ID: {person_id}")
        async with self.database.session() as session:
            try:
                person = await session.get(Person, person_id)
                if person is not None:
                    await session.delete(person)
                # Commit même si la personne n'existe pas (opération sans effet)
                await session.commit()
                return person is not None
            except Exception as e:
                await self._rollback(session)
                logger.error(f"[PersonRepository] Error deleting person {person_id}: {e}", exc_info=True)
                raise PersonDeletionError(e) from e

    @staticmethod
    async def _rollback(session: AsyncSession) -> None:
        if session.in_transaction():
            await session.rollback()
