# paige_api/models/places.py
"""Typed view of the places directory payloads, validated as soon as they arrive."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional


class PlacePhoto(BaseModel):
    photo_reference: str

    model_config = ConfigDict(extra="ignore")


class EditorialSummary(BaseModel):
    overview: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PlaceReview(BaseModel):
    text: Optional[str] = None
    author_name: Optional[str] = None
    rating: Optional[float] = None
    time: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class LatLng(BaseModel):
    lat: float
    lng: float


class Geometry(BaseModel):
    location: Optional[LatLng] = None

    model_config = ConfigDict(extra="ignore")


class PlaceSearchResult(BaseModel):
    place_id: str
    name: str
    rating: Optional[float] = None
    price_level: Optional[int] = None
    vicinity: Optional[str] = None
    formatted_address: Optional[str] = None
    types: List[str] = Field(default_factory=list)
    photos: List[PlacePhoto] = Field(default_factory=list)
    editorial_summary: Optional[EditorialSummary] = None

    model_config = ConfigDict(extra="ignore")


class PlaceDetails(BaseModel):
    name: Optional[str] = None
    website: Optional[str] = None
    formatted_phone_number: Optional[str] = None
    international_phone_number: Optional[str] = None
    formatted_address: Optional[str] = None
    url: Optional[str] = None
    opening_hours: Optional[Dict[str, Any]] = None
    current_opening_hours: Optional[Dict[str, Any]] = None
    geometry: Optional[Geometry] = None
    reviews: List[PlaceReview] = Field(default_factory=list)
    user_ratings_total: Optional[int] = None
    photos: List[PlacePhoto] = Field(default_factory=list)
    editorial_summary: Optional[EditorialSummary] = None

    model_config = ConfigDict(extra="ignore")
