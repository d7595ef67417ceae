import httpx
from fastapi import HTTPException, status

from paige_api.config import Settings, settings
from paige_api.services import mongo_service
from paige_api.services.http_client import get_httpx_client
from paige_api.services.generation_client import PlanGenerationClient
from paige_api.services.generation_pipeline import GenerationPipeline
from paige_api.services.places_client import PlacesClient
from paige_api.services.plan_persistence import PlanPersistence
from paige_api.services.todo_generator import TodoGenerator
from paige_api.services.vendor_enricher import VendorEnricher
from paige_api.utils.logger import logger


def get_app_settings() -> Settings:
    return settings


def get_database():
    """Database handle, or None when the Mongo client could not be created."""
    return mongo_service.db


async def get_http_client() -> httpx.AsyncClient:
    return await get_httpx_client()


def require_database(db):
    if db is None:
        logger.error("[MongoDB] Database not available.")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database not available")
    return db


def build_generation_pipeline(client: httpx.AsyncClient, db, app_settings: Settings) -> GenerationPipeline:
    """A fresh pipeline per request; only the HTTP connection pool is shared."""
    return GenerationPipeline(
        todo_generator=TodoGenerator(client, app_settings),
        generation_client=PlanGenerationClient(client, app_settings),
        vendor_enricher=VendorEnricher(PlacesClient(client, app_settings), app_settings),
        persistence=PlanPersistence(db, app_settings),
        settings=app_settings,
    )
