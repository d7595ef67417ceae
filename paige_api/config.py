from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FallbackBudgetShare(BaseModel):
    name: str
    percentage: float = Field(..., ge=0, le=100)
    description: Optional[str] = None


DEFAULT_FALLBACK_BUDGET_SPLIT = [
    FallbackBudgetShare(name="Venue", percentage=40, description="Ceremony and reception venue"),
    FallbackBudgetShare(name="Catering", percentage=30, description="Food and beverages"),
    FallbackBudgetShare(name="Photography", percentage=15, description="Photos and videos"),
    FallbackBudgetShare(name="Flowers", percentage=8, description="Bouquets and decorations"),
    FallbackBudgetShare(name="Music", percentage=7, description="Entertainment"),
]


class Settings(BaseSettings):
    """
    All config is loaded from environment / .env.
    Defaults are local-development values; secrets have none.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore" # Allow extra fields in .env not defined here
    )

    # environment
    env:                     str = Field("local", alias="ENV")
    log_level:               str = Field("INFO", alias="LOG_LEVEL")
    cors_origins:            List[str] = Field(default_factory=lambda: ["http://localhost:3000"], alias="CORS_ORIGINS")

    # MongoDB connection
    mongo_uri:               str = Field("mongodb://localhost:27017", alias="MONGO_URI")
    database_name:           str = Field("paige", alias="DATABASE_NAME")
    USERS_COLLECTION:              str = Field("users", alias="USERS_COLLECTION")
    TODO_LISTS_COLLECTION:         str = Field("todo_lists", alias="TODO_LISTS_COLLECTION")
    BUDGET_COLLECTION:             str = Field("budget_categories", alias="BUDGET_COLLECTION")
    ONBOARDING_VENDORS_COLLECTION: str = Field("onboarding_vendors", alias="ONBOARDING_VENDORS_COLLECTION")

    # Outbound services
    GENERATION_WEBHOOK_URL:  str = Field("http://localhost:5678/webhook/onboarding-rag", alias="GENERATION_WEBHOOK_URL")
    TODO_SERVICE_URL:        str = Field("http://localhost:8000/generate-todos", alias="TODO_SERVICE_URL")
    GOOGLE_PLACES_API_KEY:   str = Field("", alias="GOOGLE_PLACES_API_KEY")
    PLACES_BASE_URL:         str = Field("https://maps.googleapis.com/maps/api/place", alias="PLACES_BASE_URL")

    # Timeouts (seconds) and directory limits
    HTTP_TIMEOUT_SECONDS:       float = Field(30.0, gt=0, alias="HTTP_TIMEOUT_SECONDS")
    GENERATION_TIMEOUT_SECONDS: float = Field(60.0, gt=0, alias="GENERATION_TIMEOUT_SECONDS")
    TODO_TIMEOUT_SECONDS:       float = Field(15.0, gt=0, alias="TODO_TIMEOUT_SECONDS")
    PLACES_TIMEOUT_SECONDS:     float = Field(10.0, gt=0, alias="PLACES_TIMEOUT_SECONDS")
    PLACES_MAX_RESULTS:         int = Field(5, ge=1, le=20, alias="PLACES_MAX_RESULTS")
    PLACES_DETAIL_CONCURRENCY:  int = Field(5, ge=1, alias="PLACES_DETAIL_CONCURRENCY")

    # Fallback values used when upstream data is missing
    FALLBACK_BUDGET_CEILING: float = Field(50000, gt=0, alias="FALLBACK_BUDGET_CEILING")
    FALLBACK_BUDGET_SPLIT:   List[FallbackBudgetShare] = Field(
        default_factory=lambda: list(DEFAULT_FALLBACK_BUDGET_SPLIT), alias="FALLBACK_BUDGET_SPLIT"
    )
    DEFAULT_VENUE_NAME:      str = Field("Garden Manor", alias="DEFAULT_VENUE_NAME")
    DEFAULT_VENDOR_LOCATION: str = Field("Washington DC", alias="DEFAULT_VENDOR_LOCATION")

    @field_validator("FALLBACK_BUDGET_SPLIT")
    @classmethod
    def split_fits_in_budget(cls, shares: List[FallbackBudgetShare]) -> List[FallbackBudgetShare]:
        total = sum(share.percentage for share in shares)
        if total > 100:
            raise ValueError(f"Fallback budget shares sum to {total}%, which is more than 100%.")
        return shares


settings = Settings()
