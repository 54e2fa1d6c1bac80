# Standard Library
from typing import AsyncGenerator

# Third-Party Libraries
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# First-Party Libraries
from person_api.database import Database, get_database
from person_api.main import create_app
from person_api.persons.models import Person, PersonPayload
from person_api.persons.repositories import SQLAlchemyPersonRepository

# URL de base pour la DB en mémoire
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PERSONS_URL = "/persons"


def person_data(**overrides) -> dict:
    """Corps JSON valide pour une création, modifiable champ par champ."""
    data = {
        "name": "Jean Dupont",
        "age": 34,
        "nom": "Dupont",
        "prenom": "Jean",
        "email": "jean.dupont@example.com",
        "telephone": "0601020304",
        "poste": "Développeur",
        "departement": "IT",
        "dateEmbauche": "2021-09-01",
    }
    data.update(overrides)
    return data


# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """Crée une base en mémoire et ses tables pour chaque test."""
    db = Database(TEST_DATABASE_URL)
    await db.create_tables()
    yield db
    await db.close()


@pytest_asyncio.fixture(scope="function")
async def repository(database: Database) -> SQLAlchemyPersonRepository:
    return SQLAlchemyPersonRepository(database=database)


@pytest_asyncio.fixture(scope="function")
async def test_client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Fournit un AsyncClient httpx qui utilise la base de test isolée."""
    app = create_app()
    app.dependency_overrides[get_database] = lambda: database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# --- Fixtures Personnes ---

@pytest_asyncio.fixture(scope="function")
async def test_person(repository: SQLAlchemyPersonRepository) -> Person:
    """Crée une personne de test directement via le repository."""
    return await repository.create(PersonPayload(**person_data()))


@pytest.fixture
def make_payload():
    def _make(**overrides) -> PersonPayload:
        return PersonPayload(**person_data(**overrides))
    return _make
