# paige_api/services/vendor_enricher.py
import asyncio
import random
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from paige_api.config import Settings, settings as default_settings
from paige_api.models.places import PlaceDetails, PlaceSearchResult
from paige_api.models.vendors import (
    CONTACT_FOR_PRICING,
    VENDOR_CATEGORIES,
    Coordinates,
    VendorCategory,
    VendorRecord,
    VendorReview,
)
from paige_api.services.http_client import run_with_timeout
from paige_api.services.places_client import SEARCH_PHOTO_WIDTH, PlacesClient
from paige_api.utils.logger import logger
from paige_api.utils.sanitizer import clean_payload

LOCAL_AREA = "Local area"
REVIEW_EXCERPT_CHARS = 200
MAX_REVIEWS = 3

VendorMap = Dict[str, List[VendorRecord]]


def _price_label(price_level: Optional[int]) -> str:
    return "$" * price_level if price_level else CONTACT_FOR_PRICING


def _type_description(place: PlaceSearchResult, category: VendorCategory) -> str:
    if place.types and "point_of_interest" not in place.types[0]:
        return place.types[0]
    return f"{category.label} services"


class VendorEnricher:
    """
    Builds the vendor recommendations for the five fixed categories.

    Seed vendors from the generation service are normalized first. Each category
    is then searched in the places directory and every hit gets a detail lookup.
    Failures degrade per result or per category and never escape `enrich`.
    """

    def __init__(self, places: PlacesClient, settings: Settings = default_settings, rng: Optional[random.Random] = None):
        self.places = places
        self.settings = settings
        self.rng = rng or random.Random()

    # --- Seed normalization ---

    def _minimal_record(self, name: str, index: int, category: VendorCategory) -> VendorRecord:
        return VendorRecord(
            id=f"{category.value}-{index}",
            name=name,
            category=category.label,
            price=CONTACT_FOR_PRICING,
            rating=round(self.rng.uniform(4.0, 5.0), 2),
            vicinity=LOCAL_AREA,
            address=LOCAL_AREA,
            description=f"{category.label} services",
        )

    def normalize_seed_vendors(self, seed_vendors: Any) -> VendorMap:
        if not isinstance(seed_vendors, dict):
            return {}

        normalized: VendorMap = {}
        for category in VENDOR_CATEGORIES:
            entries = seed_vendors.get(category.key)
            if not isinstance(entries, list):
                continue
            records = []
            for index, entry in enumerate(entries):
                if isinstance(entry, str):
                    if entry.strip():
                        records.append(self._minimal_record(entry.strip(), index, category))
                    continue
                if not isinstance(entry, dict):
                    continue
                candidate = {"id": f"{category.value}-{index}", "category": category.label, **clean_payload(entry)}
                try:
                    records.append(VendorRecord.model_validate(candidate))
                except ValidationError as e:
                    logger.warning(f"[VENDORS] Dropping invalid seed vendor in '{category.key}': {e.error_count()} errors")
            normalized[category.key] = records
        return normalized

    # --- Record assembly ---

    def basic_record(self, place: PlaceSearchResult, category: VendorCategory) -> VendorRecord:
        description = None
        if place.editorial_summary and place.editorial_summary.overview:
            description = place.editorial_summary.overview
        record = VendorRecord(
            id=place.place_id,
            name=place.name,
            category=category.label,
            price=_price_label(place.price_level),
            rating=place.rating if place.rating is not None else 4.0,
            vicinity=place.vicinity or place.formatted_address or LOCAL_AREA,
            description=description or _type_description(place, category),
        )
        if place.photos:
            record.image = self.places.photo_url(place.photos[0].photo_reference, SEARCH_PHOTO_WIDTH)
        return record

    def detailed_record(self, place: PlaceSearchResult, details: PlaceDetails, category: VendorCategory) -> VendorRecord:
        description = None
        if details.editorial_summary and details.editorial_summary.overview:
            description = details.editorial_summary.overview
        elif details.reviews and details.reviews[0].text:
            description = details.reviews[0].text[:REVIEW_EXCERPT_CHARS] + "..."

        coordinates = None
        if details.geometry and details.geometry.location:
            coordinates = Coordinates(lat=details.geometry.location.lat, lng=details.geometry.location.lng)

        images = [self.places.photo_url(photo.photo_reference) for photo in details.photos] or None

        return VendorRecord(
            id=place.place_id,
            name=place.name,
            category=category.label,
            price=_price_label(place.price_level),
            rating=place.rating if place.rating is not None else 4.0,
            total_reviews=details.user_ratings_total or None,
            vicinity=place.vicinity or place.formatted_address or LOCAL_AREA,
            description=description or _type_description(place, category),
            website=details.website,
            phone=details.formatted_phone_number,
            international_phone=details.international_phone_number,
            address=details.formatted_address,
            google_url=details.url,
            opening_hours=details.opening_hours,
            current_opening_hours=details.current_opening_hours,
            coordinates=coordinates,
            reviews=[VendorReview(**review.model_dump()) for review in details.reviews[:MAX_REVIEWS]] or None,
            images=images,
            image=images[0] if images else None,
        )

    # --- Directory lookups ---

    async def _vendor_for_place(self, place: PlaceSearchResult, category: VendorCategory, semaphore: asyncio.Semaphore) -> VendorRecord:
        async with semaphore:
            details, error = await run_with_timeout(
                self.places.place_details(place.place_id),
                self.settings.PLACES_TIMEOUT_SECONDS,
                f"Place details for {place.name}",
            )
        if details is None:
            logger.warning(f"[VENDORS] Using search data only for '{place.name}': {error}")
            return self.basic_record(place, category)
        return self.detailed_record(place, details, category)

    async def _enrich_category(self, category: VendorCategory, location: str, seeds: List[VendorRecord], semaphore: asyncio.Semaphore) -> List[VendorRecord]:
        query = f"{category.search_term} near {location}"
        results, error = await run_with_timeout(
            self.places.text_search(query, category.directory_type),
            self.settings.PLACES_TIMEOUT_SECONDS,
            f"Places search '{query}'",
        )
        if error is not None:
            logger.warning(f"[VENDORS] Category '{category.key}' failed, keeping {len(seeds)} seeded vendors: {error}")
            return seeds
        if not results:
            logger.info(f"[VENDORS] No directory results for '{category.key}'")
            return []

        places = results[: self.settings.PLACES_MAX_RESULTS]
        vendors = await asyncio.gather(*(self._vendor_for_place(place, category, semaphore) for place in places))
        logger.info(f"[VENDORS] Category '{category.key}': {len(vendors)} vendors")
        return list(vendors)

    async def enrich(self, location: Optional[str], seed_vendors: Any = None) -> VendorMap:
        seeds = self.normalize_seed_vendors(seed_vendors)

        if not self.places.enabled:
            logger.warning("[VENDORS] No places API key configured. Returning seeded vendors only.")
            return {category.key: seeds.get(category.key, []) for category in VENDOR_CATEGORIES}

        search_location = location or self.settings.DEFAULT_VENDOR_LOCATION
        semaphore = asyncio.Semaphore(self.settings.PLACES_DETAIL_CONCURRENCY)
        results = await asyncio.gather(
            *(
                self._enrich_category(category, search_location, seeds.get(category.key, []), semaphore)
                for category in VENDOR_CATEGORIES
            ),
            return_exceptions=True,
        )

        vendors: VendorMap = {}
        for category, result in zip(VENDOR_CATEGORIES, results):
            if isinstance(result, BaseException):
                logger.error(f"[VENDORS] Unexpected error enriching '{category.key}': {result}", exc_info=result)
                vendors[category.key] = seeds.get(category.key, [])
            else:
                vendors[category.key] = result
        return vendors
