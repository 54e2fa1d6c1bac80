"""Fonctions utilitaires de validation pour le module persons."""

from datetime import datetime
from typing import Any, Optional

from .constants import (
    DATE_FORMAT,
    DATE_REGEX,
    EMAIL_REGEX,
    ERROR_AGE_POSITIVE,
    ERROR_DATE_FORMAT,
    ERROR_EMAIL_FORMAT,
    ERROR_EMAIL_REQUIRED,
    ERROR_NAME_REQUIRED,
    ERROR_NOM_REQUIRED,
    ERROR_PERSON_REQUIRED,
    ERROR_PRENOM_REQUIRED,
)
from .models import PersonPayload


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_email(email: Optional[str]) -> bool:
    """Vérifie le format `local@domaine.tld` de l'email."""
    if is_blank(email):
        return False
    return EMAIL_REGEX.fullmatch(email) is not None


def is_valid_date(value: Optional[str]) -> bool:
    """
    Vérifie qu'une chaîne est une date calendaire réelle au format yyyy-MM-dd.

    Aucune normalisation: `2024-02-30` ou `2024-1-5` sont refusées.
    """
    if is_blank(value):
        return False
    if DATE_REGEX.fullmatch(value) is None:
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def validate_person_payload(payload: Optional[PersonPayload]) -> Optional[str]:
    """
    Valide le corps d'une création ou d'un remplacement complet.

    Retourne le message de la première règle violée, ou None si le corps est valide.
    L'unicité de l'email est vérifiée séparément par le service.
    """
    if payload is None:
        return ERROR_PERSON_REQUIRED
    if is_blank(payload.name):
        return ERROR_NAME_REQUIRED
    if payload.age is None or payload.age <= 0:
        return ERROR_AGE_POSITIVE
    if is_blank(payload.nom):
        return ERROR_NOM_REQUIRED
    if is_blank(payload.prenom):
        return ERROR_PRENOM_REQUIRED
    if is_blank(payload.email):
        return ERROR_EMAIL_REQUIRED
    if not is_valid_email(payload.email):
        return ERROR_EMAIL_FORMAT
    if not is_blank(payload.dateEmbauche) and not is_valid_date(payload.dateEmbauche):
        return ERROR_DATE_FORMAT
    return None


def as_text(value: Any) -> Optional[str]:
    """Valeur JSON brute d'une mise à jour partielle -> texte épuré (null conservé)."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value).strip()


def as_int(value: Any) -> Optional[int]:
    """
    Valeur JSON brute -> entier. Un nombre décimal est tronqué.

    Lève ValueError si la valeur n'est pas convertible.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"not an integer: {value!r}")
