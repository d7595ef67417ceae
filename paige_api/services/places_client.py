# paige_api/services/places_client.py
from typing import List
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from paige_api.config import Settings, settings as default_settings
from paige_api.models.places import PlaceDetails, PlaceSearchResult
from paige_api.utils.logger import logger

DETAIL_FIELDS = ",".join([
    "name", "rating", "formatted_phone_number", "website", "formatted_address",
    "editorial_summary", "photos", "price_level", "types", "opening_hours", "reviews",
    "url", "international_phone_number", "current_opening_hours", "geometry",
    "place_id", "user_ratings_total",
])
DETAIL_PHOTO_WIDTH = 800
SEARCH_PHOTO_WIDTH = 400


class PlacesError(Exception):
    """A places directory call failed or answered with a non-OK status."""


class PlacesClient:
    """Text search and place detail lookups against the Google Places web service."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings = default_settings):
        self.client = client
        self.settings = settings
        self.base_url = settings.PLACES_BASE_URL.rstrip("/")

    @property
    def enabled(self) -> bool:
        return bool(self.settings.GOOGLE_PLACES_API_KEY)

    async def _get(self, endpoint: str, params: dict) -> dict:
        params = {**params, "key": self.settings.GOOGLE_PLACES_API_KEY}
        response = await self.client.get(
            f"{self.base_url}/{endpoint}",
            params=params,
            timeout=float(self.settings.PLACES_TIMEOUT_SECONDS),
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise PlacesError(f"{endpoint} returned a non-object body")
        return data

    async def text_search(self, query: str, place_type: str) -> List[PlaceSearchResult]:
        data = await self._get("textsearch/json", {"query": query, "type": place_type})
        status = data.get("status", "OK")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise PlacesError(f"text search for '{query}' returned {status}: {data.get('error_message', '')}")

        results = []
        for raw in data.get("results") or []:
            try:
                results.append(PlaceSearchResult.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"[PLACES] Skipping malformed search result for '{query}': {e}")
        return results

    async def place_details(self, place_id: str) -> PlaceDetails:
        data = await self._get("details/json", {"place_id": place_id, "fields": DETAIL_FIELDS})
        status = data.get("status")
        if status != "OK":
            raise PlacesError(f"details for {place_id} returned {status}: {data.get('error_message', '')}")
        if not isinstance(data.get("result"), dict):
            raise PlacesError(f"details for {place_id} carried no result")
        return PlaceDetails.model_validate(data["result"])

    def photo_url(self, photo_reference: str, max_width: int = DETAIL_PHOTO_WIDTH) -> str:
        query = urlencode({
            "maxwidth": max_width,
            "photo_reference": photo_reference,
            "key": self.settings.GOOGLE_PLACES_API_KEY,
        })
        return f"{self.base_url}/photo?{query}"
