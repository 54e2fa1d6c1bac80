"""Configuration locale du module persons."""

from person_api.config import settings

# Limites de pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = settings.DEFAULT_PAGE_SIZE
MAX_PAGE_SIZE = settings.MAX_PAGE_SIZE

# Préfixe des routes du module
PERSONS_PATH = "/persons"

# Plus grand identifiant représentable en base (BIGINT signé)
MAX_PERSON_ID = 2**63 - 1
