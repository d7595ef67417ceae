from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from paige_api.models.budget import BudgetCategory, BudgetPlan
from paige_api.models.onboarding import PlanResult
from paige_api.models.todos import TodoItem
from paige_api.models.vendors import VendorRecord
from paige_api.services.plan_persistence import PersistenceError, PlanPersistence, UserNotFoundError


def make_plan() -> PlanResult:
    return PlanResult(
        todos=[TodoItem(id="todo-1", title="Confirm guest count"), TodoItem(id="todo-2", title="Add must-haves", note="Plan B room")],
        budget=BudgetPlan(total=50000, categories=[BudgetCategory(name="Venue", amount=20000, percentage=40)]),
        vendors={
            "venues": [VendorRecord(id="p1", name="Hook Hall", category="Venue", website="https://hookhall.example.com")],
            "florists": [],
        },
    )


@pytest.mark.asyncio
async def test_persist_writes_all_records_in_order(settings, fake_db):
    order = MagicMock()
    for name in ("todo_lists", "budget_categories", "onboarding_vendors", "users"):
        order.attach_mock(fake_db[name], name)

    await PlanPersistence(fake_db, settings).persist("user-1", make_plan())

    assert [c[0] for c in order.mock_calls] == [
        "todo_lists.replace_one",
        "budget_categories.replace_one",
        "onboarding_vendors.replace_one",
        "users.update_one",
    ]


@pytest.mark.asyncio
async def test_records_are_keyed_by_user_and_document(settings, fake_db):
    await PlanPersistence(fake_db, settings).persist("user-1", make_plan())

    todo_filter, todo_doc = fake_db["todo_lists"].replace_one.call_args.args
    assert todo_filter == {"_id": "user-1:wedding-planning"}
    assert fake_db["todo_lists"].replace_one.call_args.kwargs == {"upsert": True}
    assert todo_doc["name"] == "Wedding Planning"
    assert todo_doc["isDefault"] is True
    assert [item["id"] for item in todo_doc["items"]] == ["todo-1", "todo-2"]
    assert "note" not in todo_doc["items"][0]
    assert todo_doc["items"][1]["note"] == "Plan B room"

    budget_filter, budget_doc = fake_db["budget_categories"].replace_one.call_args.args
    assert budget_filter == {"_id": "user-1:wedding-budget"}
    assert budget_doc["name"] == "Wedding Budget"
    assert budget_doc["total"] == 50000
    assert "description" not in budget_doc["categories"][0]

    vendor_filter, vendor_doc = fake_db["onboarding_vendors"].replace_one.call_args.args
    assert vendor_filter == {"_id": "user-1:recommendations"}
    assert vendor_doc["vendors"]["venues"][0] == {
        "id": "p1",
        "name": "Hook Hall",
        "category": "Venue",
        "price": "Contact for pricing",
        "rating": 4.0,
        "vicinity": "Local area",
        "website": "https://hookhall.example.com",
    }
    assert vendor_doc["vendors"]["florists"] == []

    user_filter, user_update = fake_db["users"].update_one.call_args.args
    assert user_filter == {"user_id": "user-1"}
    assert user_update["$set"]["onboardingCompleted"] is True
    assert user_update["$set"]["onboardingCompletedAt"] == user_update["$set"]["lastUpdated"]


@pytest.mark.asyncio
async def test_failure_names_the_step_and_keeps_earlier_writes(settings, fake_db):
    fake_db["onboarding_vendors"].replace_one.side_effect = ServerSelectionTimeoutError("no primary")

    with pytest.raises(PersistenceError) as exc_info:
        await PlanPersistence(fake_db, settings).persist("user-1", make_plan())

    assert exc_info.value.step == "vendor recommendations"
    assert "vendor recommendations" in str(exc_info.value)
    fake_db["todo_lists"].replace_one.assert_called_once()
    fake_db["budget_categories"].replace_one.assert_called_once()
    fake_db["users"].update_one.assert_not_called()


@pytest.mark.asyncio
async def test_missing_user_record_fails_the_last_step(settings, fake_db):
    fake_db["users"].update_one.return_value = MagicMock(matched_count=0)

    with pytest.raises(PersistenceError) as exc_info:
        await PlanPersistence(fake_db, settings).persist("ghost-user", PlanResult())

    assert exc_info.value.step == "user onboarding status"
    assert isinstance(exc_info.value.cause, UserNotFoundError)
    fake_db["todo_lists"].replace_one.assert_called_once()
    fake_db["onboarding_vendors"].replace_one.assert_called_once()
