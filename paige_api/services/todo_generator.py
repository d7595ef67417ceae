# paige_api/services/todo_generator.py
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from paige_api.config import Settings, settings as default_settings
from paige_api.models.onboarding import WeddingData
from paige_api.models.todos import TodoItem
from paige_api.services import deadline_service
from paige_api.services.http_client import run_with_timeout
from paige_api.services.todo_templates import select_template
from paige_api.utils.logger import logger


class TodoOutcome(BaseModel):
    items: List[TodoItem] = Field(default_factory=list)
    template_id: Optional[str] = None
    used_fallback: bool = False


class TodoServiceError(Exception):
    """Raised when the todo service answers with something we cannot use."""


def _convert_remote_items(raw_items: List[Any]) -> List[TodoItem]:
    items: List[TodoItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        title = raw.get("title") or raw.get("name")
        if not title:
            continue
        items.append(
            TodoItem(
                id=f"todo-{len(items) + 1}",
                title=title,
                note=raw.get("note") or raw.get("description") or None,
                category=raw.get("category") or "General",
                deadline=raw.get("deadline"),
                deadline_reasoning=raw.get("deadlineReasoning"),
                priority=raw.get("priority") or "Medium",
                completed=bool(raw.get("isCompleted") or raw.get("completed")),
            )
        )
    return items


def build_template_items(has_date: bool, normalized_date: Optional[str]) -> List[TodoItem]:
    template = select_template(has_date)
    items = []
    for index, task in enumerate(template.tasks):
        deadline, reasoning = (None, None)
        if has_date and normalized_date:
            deadline, reasoning = deadline_service.schedule(index, task.title, normalized_date)
        items.append(
            TodoItem(
                id=f"todo-{index + 1}",
                title=task.title,
                note=task.note,
                deadline=deadline,
                deadline_reasoning=reasoning,
            )
        )
    return items


class TodoGenerator:
    """Fetches the starter checklist from the todo service, falling back to the local templates."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings = default_settings):
        self.client = client
        self.settings = settings

    async def _request_todos(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.client.post(
            self.settings.TODO_SERVICE_URL,
            json=payload,
            timeout=float(self.settings.TODO_TIMEOUT_SECONDS),
        )
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict) or body.get("success") is not True:
            raise TodoServiceError("todo service did not report success")
        todos = body.get("todos")
        raw_items = todos.get("todos") if isinstance(todos, dict) else None
        if not isinstance(raw_items, list) or not raw_items:
            raise TodoServiceError("todo service returned no todos")
        return body

    async def generate(self, user_id: str, wedding_data: WeddingData, normalized_date: Optional[str], has_date: bool) -> TodoOutcome:
        profile = wedding_data.model_dump(mode="json", by_alias=True, exclude={"wedding_date"})
        profile["weddingDate"] = normalized_date
        payload = {"userId": user_id, "weddingData": profile}

        body, error = await run_with_timeout(
            self._request_todos(payload),
            self.settings.TODO_TIMEOUT_SECONDS,
            "Todo generation",
        )
        if body is not None:
            items = _convert_remote_items(body["todos"]["todos"])
            if items:
                logger.info(f"[TODO GENERATOR] Received {len(items)} todos for user {user_id}")
                return TodoOutcome(items=items, template_id=body.get("templateUsed"), used_fallback=False)
            error = "todo service returned no usable items"

        template = select_template(has_date)
        logger.warning(f"[TODO GENERATOR] Falling back to template '{template.id}' for user {user_id}: {error}")
        return TodoOutcome(
            items=build_template_items(has_date, normalized_date),
            template_id=template.id,
            used_fallback=True,
        )
