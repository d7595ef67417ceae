from pymongo import MongoClient
from pymongo.errors import ConfigurationError, InvalidURI

from paige_api.config import settings
from paige_api.utils.logger import logger

# Initialize MongoDB client using settings. MongoClient connects lazily,
# so only a malformed URI fails here.
try:
    client = MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=5000)
    db = client[settings.database_name]
except (ConfigurationError, InvalidURI, ValueError) as e:
    logger.error(f"[MongoDB] Could not create client for database '{settings.database_name}': {e}", exc_info=True)
    client = None
    db = None
