# paige_api/services/generation_pipeline.py
import asyncio
from enum import Enum
from typing import Any, Dict, List, Optional

from paige_api.config import Settings, settings as default_settings
from paige_api.models.budget import BudgetPlan
from paige_api.models.onboarding import PlanResult, WeddingContext, WeddingData
from paige_api.services.generation_client import PlanGenerationClient
from paige_api.services.plan_persistence import PersistenceError, PlanPersistence
from paige_api.services.todo_generator import TodoGenerator
from paige_api.services.vendor_enricher import VendorEnricher
from paige_api.utils.dates import UNDECIDED_DATE, has_concrete_wedding_date, normalize_wedding_date
from paige_api.utils.logger import logger
from paige_api.utils.sanitizer import clean_payload, clean_vendor_map

NO_CONTEXT_PROVIDED = "None provided"
TO_BE_DECIDED = UNDECIDED_DATE


class PipelineState(str, Enum):
    START = "start"
    NORMALIZING_DATE = "normalizing-date"
    GENERATING_TODOS = "generating-todos"
    CALLING_GENERATION_SERVICE = "calling-generation-service"
    SUCCESS = "success"
    FALLBACK = "fallback"
    ENRICHING_VENDORS = "enriching-vendors"
    SANITIZING = "sanitizing"
    PERSISTING = "persisting"
    DONE = "done"
    ERROR = "error"


def build_wedding_context(wedding_data: WeddingData, normalized_date: Optional[str], settings: Settings = default_settings) -> WeddingContext:
    names = [name for name in (wedding_data.user_name, wedding_data.partner_name) if name]
    venue_metadata = wedding_data.selected_venue_metadata or {}
    return WeddingContext(
        couple=" & ".join(names) or TO_BE_DECIDED,
        wedding_date=normalized_date or UNDECIDED_DATE,
        location=wedding_data.wedding_location or TO_BE_DECIDED,
        venue=venue_metadata.get("name") or settings.DEFAULT_VENUE_NAME,
        budget=wedding_data.max_budget,
        guest_count=wedding_data.guest_count,
        style=", ".join(wedding_data.vibe) or TO_BE_DECIDED,
        additional_context=wedding_data.additional_context or NO_CONTEXT_PROVIDED,
    )


class GenerationPipeline:
    """
    One preliminary-plan generation for one user.

    Upstream failures are absorbed into fallbacks and only show up in the
    fallback flags; a persistence failure is the only error that escapes `run`.
    """

    def __init__(
        self,
        todo_generator: TodoGenerator,
        generation_client: PlanGenerationClient,
        vendor_enricher: VendorEnricher,
        persistence: PlanPersistence,
        settings: Settings = default_settings,
    ):
        self.todo_generator = todo_generator
        self.generation_client = generation_client
        self.vendor_enricher = vendor_enricher
        self.persistence = persistence
        self.settings = settings
        self.state = PipelineState.START
        self.history: List[PipelineState] = [PipelineState.START]

    def _transition(self, state: PipelineState, user_id: str):
        logger.info(f"[PIPELINE] user {user_id}: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    async def run(self, user_id: str, wedding_data: WeddingData) -> Dict[str, Any]:
        self._transition(PipelineState.NORMALIZING_DATE, user_id)
        normalized_date = normalize_wedding_date(wedding_data.wedding_date)
        has_date = has_concrete_wedding_date(normalized_date, wedding_data.wedding_date_undecided)
        context = build_wedding_context(wedding_data, normalized_date, self.settings)

        self._transition(PipelineState.GENERATING_TODOS, user_id)
        todo_task = self.todo_generator.generate(user_id, wedding_data, normalized_date, has_date)
        self._transition(PipelineState.CALLING_GENERATION_SERVICE, user_id)
        generation_task = self.generation_client.generate(user_id, context)
        todo_outcome, generation = await asyncio.gather(todo_task, generation_task)

        fallback_sources = []
        if todo_outcome.used_fallback:
            fallback_sources.append("todos")
        if generation.used_fallback:
            fallback_sources.append("generation")
            self._transition(PipelineState.FALLBACK, user_id)
        else:
            self._transition(PipelineState.SUCCESS, user_id)
            if generation.todos:
                logger.info(f"[PIPELINE] Generation service proposed {len(generation.todos)} todos; keeping the {len(todo_outcome.items)} checklist items")

        self._transition(PipelineState.ENRICHING_VENDORS, user_id)
        vendors = await self.vendor_enricher.enrich(wedding_data.wedding_location, generation.vendors)

        self._transition(PipelineState.SANITIZING, user_id)
        budget = BudgetPlan.model_validate(clean_payload(generation.budget.model_dump()))
        vendor_documents = clean_vendor_map(
            {key: [vendor.to_document() for vendor in records] for key, records in vendors.items()}
        )
        plan = PlanResult(
            todos=todo_outcome.items,
            budget=budget,
            vendors=vendors,
            used_fallback_todos=bool(fallback_sources),
            used_fallback=bool(fallback_sources),
            fallback_sources=fallback_sources,
        )

        self._transition(PipelineState.PERSISTING, user_id)
        try:
            await self.persistence.persist(user_id, plan)
        except PersistenceError:
            self._transition(PipelineState.ERROR, user_id)
            raise

        self._transition(PipelineState.DONE, user_id)
        logger.info(
            f"[PIPELINE] Plan ready for user {user_id}: {len(plan.todos)} todos, "
            f"{len(budget.categories)} budget categories, fallbacks={fallback_sources or 'none'}"
        )
        return {
            "todos": [clean_payload(item.model_dump(mode="json", by_alias=True)) for item in plan.todos],
            "budget": clean_payload(budget.model_dump(mode="json")),
            "vendors": vendor_documents,
            "weddingDate": normalized_date,
            "guestCount": wedding_data.guest_count,
            "budgetAmount": wedding_data.max_budget,
            "location": wedding_data.wedding_location,
            "additionalContext": wedding_data.additional_context,
            "usedFallbackTodos": plan.used_fallback_todos,
            "usedFallback": plan.used_fallback,
            "fallbackSources": fallback_sources,
        }
