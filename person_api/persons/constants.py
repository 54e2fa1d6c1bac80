"""Constantes du module persons."""

import re

# Formats
# Utilisées avec fullmatch: la chaîne entière doit correspondre
EMAIL_REGEX = re.compile(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
DATE_REGEX = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DATE_FORMAT = "%Y-%m-%d"

# Messages de validation (création / remplacement complet)
ERROR_PERSON_REQUIRED = "Person data is required"
ERROR_NAME_REQUIRED = "Name is required"
ERROR_AGE_POSITIVE = "Age must be a positive number"
ERROR_NOM_REQUIRED = "Nom (last name) is required"
ERROR_PRENOM_REQUIRED = "Prenom (first name) is required"
ERROR_EMAIL_REQUIRED = "Email is required"
ERROR_EMAIL_FORMAT = "Invalid email format"
ERROR_DATE_FORMAT = "Invalid date format for dateEmbauche. Use yyyy-MM-dd"

# Messages de validation (mise à jour partielle)
ERROR_NAME_EMPTY = "Name cannot be empty"
ERROR_NOM_EMPTY = "Nom cannot be empty"
ERROR_PRENOM_EMPTY = "Prenom cannot be empty"
ERROR_EMAIL_EMPTY = "Email cannot be empty"
ERROR_AGE_FORMAT = "Invalid age format"
ERROR_PATCH_DATE_FORMAT = "Invalid date format. Use yyyy-MM-dd (e.g., 2024-01-15)"
ERROR_NO_FIELDS = "No fields provided for update"
ERROR_NO_VALID_FIELDS = "No valid fields provided for update"

# Paramètres de recherche
ERROR_SEARCH_NAME_REQUIRED = "Search parameter 'name' is required"
ERROR_DEPARTMENT_NAME_REQUIRED = "Query parameter 'name' is required"

# Réponses
MESSAGE_PERSON_DELETED = "Person deleted successfully"

# Contextes des erreurs inattendues
CONTEXT_RETRIEVE_ALL = "Error retrieving persons"
CONTEXT_RETRIEVE_ONE = "Error retrieving person"
CONTEXT_SEARCH_NAME = "Error searching persons"
CONTEXT_SEARCH_DEPARTMENT = "Error searching persons by department"
CONTEXT_CREATE = "Error creating person"
CONTEXT_UPDATE = "Error updating person"
CONTEXT_DELETE = "Error deleting person"
CONTEXT_COUNT = "Error counting persons"
CONTEXT_LOOKUP = "Error retrieving reference values"
