from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Index, func
from sqlmodel import SQLModel, Field

# --- Modèle de base pour les personnes ---
class PersonBase(SQLModel):
    """Champs optionnels partagés par la table et les schémas API."""
    telephone: Optional[str] = Field(default=None)
    poste: Optional[str] = Field(default=None)
    departement: Optional[str] = Field(default=None, index=True)
    # Stockée en texte, format strict yyyy-MM-dd
    dateEmbauche: Optional[str] = Field(default=None, sa_column_kwargs={"name": "date_embauche"})

# --- Modèle Person (Table) ---
class Person(PersonBase, table=True):
    """Modèle de table pour les personnes."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    age: int = Field(nullable=False)
    nom: str = Field(nullable=False)
    prenom: str = Field(nullable=False)
    email: str = Field(nullable=False, unique=True)

    # Nom de la table
    __tablename__ = "persons"

    def __repr__(self) -> str:
        return f"Person(id={self.id}, name={self.name!r}, nom={self.nom!r}, prenom={self.prenom!r}, email={self.email!r})"

# Unicité de l'email insensible à la casse, garantie par la base
Index("uq_persons_email_lower", func.lower(Person.__table__.c.email), unique=True)

# --- Schémas API ---
class PersonPayload(PersonBase):
    """
    Corps d'une création (POST) ou d'un remplacement complet (PUT).

    Tous les champs sont optionnels au niveau du schéma: les règles métier
    (champs obligatoires, formats) sont vérifiées par le service pour renvoyer
    des messages d'erreur explicites. Un `id` éventuel est ignoré.
    """
    name: Optional[str] = None
    age: Optional[int] = None
    nom: Optional[str] = None
    prenom: Optional[str] = None
    email: Optional[str] = None

class PersonRead(PersonBase):
    """Schéma pour la lecture d'une personne."""
    id: int
    name: str
    age: int
    nom: str
    prenom: str
    email: str

class PersonPatch(BaseModel):
    """
    Corps d'une mise à jour partielle (PATCH).

    Seuls les champs présents dans le JSON reçu sont pris en compte
    (`model_fields_set`). Une valeur `null` explicite est donc distincte d'un
    champ absent. Les clés inconnues sont conservées dans `model_extra` pour
    distinguer un corps vide d'un corps sans champ reconnu.

    Les valeurs restent brutes (nombre, texte...): le service les convertit
    après avoir vérifié que la personne existe.
    """
    model_config = ConfigDict(extra="allow")

    name: Any = None
    age: Any = None
    nom: Any = None
    prenom: Any = None
    email: Any = None
    telephone: Any = None
    poste: Any = None
    departement: Any = None
    dateEmbauche: Any = None

    @property
    def provided_fields(self) -> set:
        """Champs reconnus présents dans le corps de la requête."""
        return {name for name in self.model_fields_set if name in type(self).model_fields}

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set and not self.model_extra

class PersonCount(SQLModel):
    count: int

class PersonDeleted(SQLModel):
    message: str
    id: str

# --- Fin Modèle Person SQLModel ---
