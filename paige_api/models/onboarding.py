# paige_api/models/onboarding.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Any, Dict, List, Optional

from paige_api.models.budget import BudgetPlan
from paige_api.models.todos import TodoItem
from paige_api.models.vendors import VendorRecord


class WeddingData(BaseModel):
    """Profile collected by the onboarding flow. Unknown keys are kept and forwarded."""
    user_name: Optional[str] = Field(None, alias="userName")
    partner_name: Optional[str] = Field(None, alias="partnerName")
    wedding_date: Any = Field(None, alias="weddingDate", description="ISO string, epoch-seconds object or other date shape")
    wedding_date_undecided: bool = Field(False, alias="weddingDateUndecided")
    wedding_location: Optional[str] = Field(None, alias="weddingLocation")
    selected_venue_metadata: Optional[Dict[str, Any]] = Field(None, alias="selectedVenueMetadata")
    max_budget: Optional[float] = Field(None, ge=0, alias="maxBudget")
    guest_count: Optional[int] = Field(None, ge=0, alias="guestCount")
    vibe: List[str] = Field(default_factory=list)
    additional_context: Optional[str] = Field(None, alias="additionalContext")

    @field_validator("vibe", mode="before")
    @classmethod
    def coerce_vibe(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("wedding_date_undecided", mode="before")
    @classmethod
    def coerce_undecided(cls, v):
        return bool(v) if v is not None else False

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class WeddingContext(BaseModel):
    """Immutable summary sent to the generation service, built once per request."""
    couple: str
    wedding_date: str = Field(..., alias="weddingDate")
    location: str
    venue: Optional[str] = None
    budget: Optional[float] = None
    guest_count: Optional[int] = Field(None, alias="guestCount")
    style: str
    additional_context: str = Field(..., alias="additionalContext")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class GeneratePlanRequest(BaseModel):
    # Both fields are optional here so that missing data yields a 400, not a 422
    user_id: Optional[str] = Field(None, alias="userId")
    wedding_data: Optional[WeddingData] = Field(None, alias="weddingData")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PlanResult(BaseModel):
    todos: List[TodoItem] = Field(default_factory=list)
    budget: BudgetPlan = Field(default_factory=BudgetPlan)
    vendors: Dict[str, List[VendorRecord]] = Field(default_factory=dict)
    used_fallback_todos: bool = Field(False, alias="usedFallbackTodos")
    used_fallback: bool = Field(False, alias="usedFallback")
    fallback_sources: List[str] = Field(default_factory=list, alias="fallbackSources")

    model_config = ConfigDict(populate_by_name=True)


class GeneratePlanResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {
                    "todos": [{"id": "todo-1", "title": "Browse and favorite venues on the Vendors page", "priority": "Medium", "completed": False}],
                    "budget": {"total": 50000, "categories": [{"name": "Venue", "amount": 20000, "percentage": 40}]},
                    "vendors": {"venues": [], "photographers": [], "florists": [], "caterers": [], "music": []},
                    "weddingDate": None,
                    "guestCount": 120,
                    "budgetAmount": 50000,
                    "location": "Washington DC",
                    "additionalContext": None,
                    "usedFallbackTodos": True,
                    "usedFallback": True,
                    "fallbackSources": ["todos", "generation"]
                }
            }
        }
