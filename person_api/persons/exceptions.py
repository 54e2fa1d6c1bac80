"""Exceptions personnalisées pour le module persons."""


class PersonError(Exception):
    """Classe de base pour les exceptions liées aux personnes."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class PersonNotFoundError(PersonError):
    """Levée lorsque la personne n'est pas trouvée."""
    def __init__(self, person_id: int):
        self.person_id = person_id
        super().__init__(f"Person with id {person_id} not found")


class PersonValidationError(PersonError):
    """Levée lorsqu'un champ est absent, vide ou mal formé."""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class DuplicateEmailError(PersonValidationError):
    """Levée lorsqu'une personne avec cet email existe déjà."""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email '{email}' already exists", field="email")


class PersonPersistenceError(PersonError):
    """Échec d'une écriture en base (transaction annulée)."""
    operation = "persisting"

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Error {self.operation} person: {cause}")


class PersonCreationError(PersonPersistenceError):
    """Levée lors d'un échec de la création d'une personne."""
    operation = "creating"


class PersonUpdateError(PersonPersistenceError):
    """Levée lors d'un échec de la mise à jour d'une personne."""
    operation = "updating"


class PersonDeletionError(PersonPersistenceError):
    """Levée lors d'un échec de la suppression d'une personne."""
    operation = "deleting"
