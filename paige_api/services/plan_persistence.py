# paige_api/services/plan_persistence.py
import asyncio
from typing import Any, Dict

from paige_api.config import Settings, settings as default_settings
from paige_api.models.onboarding import PlanResult
from paige_api.utils.dates import get_utc_now
from paige_api.utils.logger import logger
from paige_api.utils.sanitizer import clean_payload, clean_vendor_map

TODO_LIST_KEY = "wedding-planning"
BUDGET_KEY = "wedding-budget"
VENDOR_RECOMMENDATIONS_KEY = "recommendations"


class PersistenceError(Exception):
    """A write of the generated plan failed. Earlier writes are not rolled back."""

    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"Failed to save {step}: {cause}")


class UserNotFoundError(LookupError):
    pass


def record_id(user_id: str, key: str) -> str:
    return f"{user_id}:{key}"


class PlanPersistence:
    """
    Writes one user's generated plan to MongoDB.

    Records are written in a fixed order with no transaction: todo list, budget,
    vendor recommendations, then the onboarding flag on the user. Each record is
    a full overwrite keyed by user and document key.
    """

    def __init__(self, db, settings: Settings = default_settings):
        self.db = db
        self.settings = settings

    def _set(self, collection_name: str, user_id: str, key: str, document: Dict[str, Any]):
        doc = {**document, "_id": record_id(user_id, key), "user_id": user_id, "key": key}
        self.db[collection_name].replace_one({"_id": doc["_id"]}, doc, upsert=True)

    def _write_todo_list(self, user_id: str, plan: PlanResult, now):
        self._set(self.settings.TODO_LISTS_COLLECTION, user_id, TODO_LIST_KEY, {
            "name": "Wedding Planning",
            "description": "Your personalized wedding planning checklist",
            "isDefault": True,
            "items": [clean_payload(item.model_dump(by_alias=True)) for item in plan.todos],
            "createdAt": now,
            "updatedAt": now,
        })

    def _write_budget(self, user_id: str, plan: PlanResult, now):
        budget = clean_payload(plan.budget.model_dump())
        self._set(self.settings.BUDGET_COLLECTION, user_id, BUDGET_KEY, {
            "name": "Wedding Budget",
            "total": budget.get("total", 0),
            "categories": budget.get("categories", []),
            "createdAt": now,
            "updatedAt": now,
        })

    def _write_vendors(self, user_id: str, plan: PlanResult, now):
        vendors = {key: [vendor.to_document() for vendor in records] for key, records in plan.vendors.items()}
        self._set(self.settings.ONBOARDING_VENDORS_COLLECTION, user_id, VENDOR_RECOMMENDATIONS_KEY, {
            "vendors": clean_vendor_map(vendors),
            "createdAt": now,
            "updatedAt": now,
        })

    def _mark_onboarding_complete(self, user_id: str, plan: PlanResult, now):
        result = self.db[self.settings.USERS_COLLECTION].update_one(
            {"user_id": user_id},
            {"$set": {"onboardingCompleted": True, "onboardingCompletedAt": now, "lastUpdated": now}},
        )
        if result.matched_count == 0:
            raise UserNotFoundError(f"No user record for {user_id}")

    async def persist(self, user_id: str, plan: PlanResult) -> None:
        now = get_utc_now()
        steps = [
            ("todo list", self._write_todo_list),
            ("budget", self._write_budget),
            ("vendor recommendations", self._write_vendors),
            ("user onboarding status", self._mark_onboarding_complete),
        ]
        for step, write in steps:
            try:
                await asyncio.to_thread(write, user_id, plan, now)
            except Exception as e:
                logger.error(f"[PERSISTENCE] Writing {step} for user {user_id} failed: {e}", exc_info=True)
                raise PersistenceError(step, e) from e
            logger.info(f"[PERSISTENCE] Saved {step} for user {user_id}")
