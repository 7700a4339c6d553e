# =============================================================================
# config/__init__.py
# =============================================================================
# PURPOSE:
#   Makes 'config' a package and lifts every setting to package level:
#       from config import DB_PATH, EXPIRING_SOON_DAYS
#   instead of:
#       from config.settings import DB_PATH, EXPIRING_SOON_DAYS
# =============================================================================

from .settings import *
