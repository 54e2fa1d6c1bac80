"""
Interfaces pour les repositories de personnes.

Ce fichier contient l'interface (classe abstraite) du repository utilisé
par le service du module persons.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from person_api.persons.models import Person, PersonPayload


class AbstractPersonRepository(ABC):
    """Interface pour le repository des personnes."""

    @abstractmethod
    async def find_all(self) -> List[Person]:
        """Toutes les personnes, les plus récentes d'abord."""
        pass

    @abstractmethod
    async def find_by_id(self, person_id: int) -> Optional[Person]:
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> List[Person]:
        """Recherche insensible à la casse dans name, nom et prenom."""
        pass

    @abstractmethod
    async def find_by_departement(self, departement: str) -> List[Person]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_email_excluding_id(self, email: str, exclude_id: int) -> bool:
        pass

    @abstractmethod
    async def create(self, person_data: PersonPayload) -> Person:
        pass

    @abstractmethod
    async def update(self, person_id: int, values: dict) -> Optional[Person]:
        """Remplace les colonnes données d'une personne existante."""
        pass

    @abstractmethod
    async def delete(self, person_id: int) -> bool:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def count_by_departement(self, departement: str) -> int:
        pass

    @abstractmethod
    async def get_all_departements(self) -> List[str]:
        pass

    @abstractmethod
    async def get_all_postes(self) -> List[str]:
        pass

    @abstractmethod
    async def find_with_pagination(self, page: int, page_size: int) -> List[Person]:
        pass
