# paige_api/services/generation_client.py
import json
import math
from typing import Any, Dict, List, Literal, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from paige_api.config import Settings, settings as default_settings
from paige_api.models.budget import BudgetCategory, BudgetPlan
from paige_api.models.onboarding import WeddingContext
from paige_api.services.http_client import run_with_timeout
from paige_api.utils.logger import logger

REQUEST_TYPE = "generate_preliminary"


class GenerationServiceError(Exception):
    """The generation webhook answered with a body that cannot be used."""


class GenerationBody(BaseModel):
    """
    The two shapes the generation webhook answers with.

    `enveloped` bodies carry the plan under `data`, `flat` bodies hold
    `todos`/`budget`/`vendors` at the top level.
    """
    kind: Literal["enveloped", "flat"]
    content: Dict[str, Any]


class GenerationOutcome(BaseModel):
    todos: List[Any] = Field(default_factory=list)
    budget: BudgetPlan = Field(default_factory=BudgetPlan)
    vendors: Dict[str, Any] = Field(default_factory=dict)
    used_fallback: bool = False
    error: Optional[str] = None


def parse_generation_body(raw: Any) -> GenerationBody:
    """Tag a decoded webhook body. A single-element list wrapping the object is unwrapped first."""
    if isinstance(raw, list) and len(raw) == 1:
        raw = raw[0]
    if not isinstance(raw, dict):
        raise GenerationServiceError(f"expected a JSON object, got {type(raw).__name__}")
    if isinstance(raw.get("data"), dict):
        return GenerationBody(kind="enveloped", content=raw["data"])
    return GenerationBody(kind="flat", content=raw)


def extract_budget(raw_budget: Any) -> BudgetPlan:
    if not isinstance(raw_budget, dict):
        return BudgetPlan()
    categories = []
    for raw in raw_budget.get("categories") or []:
        if not isinstance(raw, dict) or not raw.get("name"):
            continue
        try:
            categories.append(BudgetCategory.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"[GENERATION] Dropping budget category {raw.get('name')!r}: {e}")
    return BudgetPlan(total=raw_budget.get("total", 0), categories=categories)


def extract_plan(body: GenerationBody) -> GenerationOutcome:
    content = body.content
    todos = content.get("todos") if isinstance(content.get("todos"), list) else []
    vendors = content.get("vendors") if isinstance(content.get("vendors"), dict) else {}
    return GenerationOutcome(
        todos=todos,
        budget=extract_budget(content.get("budget")),
        vendors=vendors,
        used_fallback=False,
    )


def build_fallback_budget(max_budget: Optional[float], settings: Settings = default_settings) -> BudgetPlan:
    """
    Fixed percentage split of the user's ceiling, or of the configured default
    ceiling when the user gave none. Amounts are whole units rounded down.
    """
    ceiling = max_budget if max_budget and max_budget > 0 else settings.FALLBACK_BUDGET_CEILING
    categories = [
        BudgetCategory(
            name=share.name,
            amount=math.floor(ceiling * share.percentage / 100),
            percentage=share.percentage,
            description=share.description,
        )
        for share in settings.FALLBACK_BUDGET_SPLIT
    ]
    return BudgetPlan(total=ceiling, categories=categories)


class PlanGenerationClient:
    def __init__(self, client: httpx.AsyncClient, settings: Settings = default_settings):
        self.client = client
        self.settings = settings

    async def _post_context(self, user_id: str, context: WeddingContext) -> GenerationBody:
        payload = [{
            "userId": user_id,
            "weddingContext": context.model_dump(mode="json", by_alias=True),
            "requestType": REQUEST_TYPE,
        }]
        response = await self.client.post(
            self.settings.GENERATION_WEBHOOK_URL,
            json=payload,
            timeout=float(self.settings.GENERATION_TIMEOUT_SECONDS),
        )
        response.raise_for_status()
        text = response.text
        if not text or not text.strip():
            raise GenerationServiceError("empty response body")
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise GenerationServiceError(f"response is not JSON: {e}") from e
        return parse_generation_body(raw)

    def fallback(self, context: WeddingContext, error: Optional[str]) -> GenerationOutcome:
        return GenerationOutcome(
            budget=build_fallback_budget(context.budget, self.settings),
            vendors={},
            used_fallback=True,
            error=error,
        )

    async def generate(self, user_id: str, context: WeddingContext) -> GenerationOutcome:
        body, error = await run_with_timeout(
            self._post_context(user_id, context),
            self.settings.GENERATION_TIMEOUT_SECONDS,
            "Plan generation",
        )
        if body is None:
            logger.warning(f"[GENERATION] Using fallback plan for user {user_id}: {error}")
            return self.fallback(context, error)

        outcome = extract_plan(body)
        logger.info(
            f"[GENERATION] Parsed {body.kind} body for user {user_id}: "
            f"{len(outcome.todos)} todos, {len(outcome.budget.categories)} budget categories, "
            f"{len(outcome.vendors)} vendor categories"
        )
        return outcome
