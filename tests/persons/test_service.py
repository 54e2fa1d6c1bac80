"""
Tests unitaires du PersonService avec un repository simulé.
"""
import pytest
from unittest.mock import AsyncMock

from person_api.persons.exceptions import (
    DuplicateEmailError,
    PersonNotFoundError,
    PersonValidationError,
)
from person_api.persons.interfaces.repositories import AbstractPersonRepository
from person_api.persons.models import Person, PersonPatch, PersonPayload
from person_api.persons.service import PersonService
from tests.conftest import person_data


@pytest.fixture
def existing_person() -> Person:
    return Person(id=7, **person_data())


@pytest.fixture
def mock_repository(existing_person):
    """Fixture pour un mock du repository."""
    repository = AsyncMock(spec=AbstractPersonRepository)
    repository.find_by_id.return_value = existing_person
    repository.exists_by_email.return_value = False
    repository.exists_by_email_excluding_id.return_value = False
    repository.update.side_effect = lambda person_id, values: existing_person
    repository.delete.return_value = True
    return repository


@pytest.fixture
def person_service(mock_repository):
    return PersonService(repository=mock_repository)


@pytest.mark.asyncio
async def test_create_person_checks_email_first(person_service, mock_repository):
    mock_repository.exists_by_email.return_value = True
    with pytest.raises(DuplicateEmailError):
        await person_service.create_person(PersonPayload(**person_data()))
    mock_repository.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_person_invalid_data_never_hits_storage(person_service, mock_repository):
    with pytest.raises(PersonValidationError) as exc_info:
        await person_service.create_person(PersonPayload(**person_data(email="nope")))
    assert exc_info.value.message == "Invalid email format"
    mock_repository.exists_by_email.assert_not_called()
    mock_repository.create.assert_not_called()


@pytest.mark.asyncio
async def test_replace_person_not_found_before_validation(person_service, mock_repository):
    mock_repository.find_by_id.return_value = None
    with pytest.raises(PersonNotFoundError):
        await person_service.replace_person(1, PersonPayload(**person_data(age=-5)))


@pytest.mark.asyncio
async def test_replace_person_same_email_skips_uniqueness_check(person_service, mock_repository):
    payload = PersonPayload(**person_data(email="JEAN.DUPONT@EXAMPLE.COM", poste=None))
    await person_service.replace_person(7, payload)
    mock_repository.exists_by_email_excluding_id.assert_not_called()
    values = mock_repository.update.call_args.args[1]
    assert values["poste"] is None
    assert values["email"] == "JEAN.DUPONT@EXAMPLE.COM"


@pytest.mark.asyncio
async def test_patch_person_builds_only_provided_values(person_service, mock_repository):
    patch = PersonPatch(telephone=None, dateEmbauche="  ", age=41)
    await person_service.patch_person(7, patch)
    mock_repository.update.assert_awaited_once_with(
        7, {"age": 41, "telephone": None, "dateEmbauche": None}
    )


@pytest.mark.asyncio
async def test_patch_person_new_email_checked_excluding_self(person_service, mock_repository):
    await person_service.patch_person(7, PersonPatch(email=" new@example.com "))
    mock_repository.exists_by_email_excluding_id.assert_awaited_once_with("new@example.com", 7)
    mock_repository.update.assert_awaited_once_with(7, {"email": "new@example.com"})


@pytest.mark.asyncio
async def test_patch_person_rejected_field_writes_nothing(person_service, mock_repository):
    with pytest.raises(PersonValidationError):
        await person_service.patch_person(7, PersonPatch(poste="Chef", age=0))
    mock_repository.update.assert_not_called()


@pytest.mark.asyncio
async def test_patch_person_without_body(person_service):
    with pytest.raises(PersonValidationError) as exc_info:
        await person_service.patch_person(7, None)
    assert exc_info.value.message == "No fields provided for update"


@pytest.mark.asyncio
async def test_delete_person_vanished_between_check_and_delete(person_service, mock_repository):
    mock_repository.delete.return_value = False
    with pytest.raises(PersonNotFoundError):
        await person_service.delete_person(7)


@pytest.mark.asyncio
async def test_delete_person_response(person_service):
    deleted = await person_service.delete_person(7)
    assert deleted.message == "Person deleted successfully"
    assert deleted.id == "7"


@pytest.mark.asyncio
async def test_count_persons_by_departement(person_service, mock_repository):
    mock_repository.count_by_departement.return_value = 3
    assert await person_service.count_persons(departement="IT") == 3
    mock_repository.count.assert_not_called()


@pytest.mark.asyncio
async def test_search_by_name_blank(person_service, mock_repository):
    with pytest.raises(PersonValidationError):
        await person_service.search_by_name("  ")
    mock_repository.find_by_name.assert_not_called()


@pytest.mark.asyncio
async def test_patch_person_bad_age_format(person_service, mock_repository):
    with pytest.raises(PersonValidationError) as exc_info:
        await person_service.patch_person(7, PersonPatch(age="abc"))
    assert exc_info.value.message == "Invalid age format"
    mock_repository.update.assert_not_called()


@pytest.mark.asyncio
async def test_patch_person_missing_before_field_checks(person_service, mock_repository):
    mock_repository.find_by_id.return_value = None
    with pytest.raises(PersonNotFoundError):
        await person_service.patch_person(7, PersonPatch(age="abc"))


@pytest.mark.asyncio
async def test_get_person_id_beyond_storage_range(person_service, mock_repository):
    with pytest.raises(PersonNotFoundError):
        await person_service.get_person(2**64)
    mock_repository.find_by_id.assert_not_called()
