# paige_api/models/vendors.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Any, Dict, List, Optional

CONTACT_FOR_PRICING = "Contact for pricing"


class VendorCategory(BaseModel):
    """One of the fixed vendor domains the onboarding flow recommends."""
    key: str = Field(..., description="Key in the vendor recommendations map")
    directory_type: str = Field(..., description="Places directory type filter")
    search_term: str
    label: str = Field(..., description="Singular label shown on vendor cards")
    value: str = Field(..., description="Prefix of synthetic vendor ids")

    model_config = ConfigDict(frozen=True)


VENDOR_CATEGORIES: List[VendorCategory] = [
    VendorCategory(key="venues", directory_type="wedding_venue", search_term="wedding venue", label="Venue", value="wedding_venue"),
    VendorCategory(key="photographers", directory_type="establishment", search_term="wedding photographer", label="Photographer", value="photographer"),
    VendorCategory(key="florists", directory_type="florist", search_term="wedding florist", label="Florist", value="florist"),
    VendorCategory(key="caterers", directory_type="caterer", search_term="wedding caterer", label="Caterer", value="caterer"),
    VendorCategory(key="music", directory_type="establishment", search_term="wedding music dj band", label="DJ", value="dj"),
]
VENDOR_CATEGORY_KEYS = [category.key for category in VENDOR_CATEGORIES]


class Coordinates(BaseModel):
    lat: float
    lng: float


class VendorReview(BaseModel):
    text: Optional[str] = None
    author_name: Optional[str] = None
    rating: Optional[float] = None
    time: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class VendorRecord(BaseModel):
    id: str
    name: str
    category: str
    price: str = CONTACT_FOR_PRICING
    rating: float = Field(4.0, ge=0, le=5)
    total_reviews: Optional[int] = Field(None, alias="totalReviews")
    vicinity: str = "Local area"
    description: Optional[str] = None

    # Detail fields, present only when the place detail fetch succeeded
    website: Optional[str] = None
    phone: Optional[str] = None
    international_phone: Optional[str] = Field(None, alias="internationalPhone")
    address: Optional[str] = None
    google_url: Optional[str] = Field(None, alias="googleUrl")
    opening_hours: Optional[Dict[str, Any]] = Field(None, alias="openingHours")
    current_opening_hours: Optional[Dict[str, Any]] = Field(None, alias="currentOpeningHours")
    coordinates: Optional[Coordinates] = None
    reviews: Optional[List[VendorReview]] = None
    images: Optional[List[str]] = None
    image: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def round_rating(cls, v):
        try:
            rating = float(v)
        except (TypeError, ValueError):
            return 4.0
        return round(min(max(rating, 0.0), 5.0), 2)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
