# paige_api/models/budget.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional


class BudgetCategory(BaseModel):
    name: str
    amount: float = Field(0.0, ge=0)
    percentage: Optional[float] = None
    description: Optional[str] = None

    # Generation output is loosely typed: "1,500", -20 and None all show up
    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        if isinstance(v, str):
            v = v.replace(",", "").replace("$", "").strip()
        try:
            amount = float(v)
        except (TypeError, ValueError):
            return 0.0
        return amount if amount > 0 else 0.0

    @field_validator("percentage", mode="before")
    @classmethod
    def coerce_percentage(cls, v):
        if v is None:
            return None
        try:
            return float(str(v).rstrip("%"))
        except (TypeError, ValueError):
            return None

    model_config = ConfigDict(extra="ignore")


class BudgetPlan(BaseModel):
    total: float = Field(0.0, ge=0)
    categories: List[BudgetCategory] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def coerce_total(cls, v):
        return BudgetCategory.coerce_amount(v)

    model_config = ConfigDict(extra="ignore")
