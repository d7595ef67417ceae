# paige_api/services/todo_service.py
from datetime import datetime
from typing import Any, Dict, Optional

from paige_api.models.todos import GeneratedTodo, GeneratedTodoList, GenerateTodosResponse
from paige_api.services import deadline_service
from paige_api.services.todo_templates import select_template
from paige_api.utils.dates import has_concrete_wedding_date, normalize_wedding_date
from paige_api.utils.logger import logger


def generate_todos(user_id: str, wedding_data: Dict[str, Any], now: Optional[datetime] = None) -> GenerateTodosResponse:
    """
    Builds the starter checklist for a user from the template matching their date status.

    With a concrete wedding date every item also gets a phase-based deadline and
    the reasoning behind it. Order of the template is preserved.
    """
    wedding_date = normalize_wedding_date(wedding_data.get("weddingDate"))
    has_date = has_concrete_wedding_date(wedding_date, bool(wedding_data.get("weddingDateUndecided")))
    template = select_template(has_date)
    logger.info(f"[TODOS] user {user_id}: has wedding date={has_date}, using template '{template.id}'")

    todos = []
    for index, task in enumerate(template.tasks):
        deadline, reasoning = (None, None)
        if has_date:
            deadline, reasoning = deadline_service.schedule(index, task.title, wedding_date, now)
        todos.append(
            GeneratedTodo(
                id=f"todo-{index + 1}",
                name=task.title,
                note=task.note or "",
                category="",
                priority="Medium",
                is_completed=False,
                deadline=deadline,
                deadline_reasoning=reasoning,
            )
        )

    logger.info(f"[TODOS] Generated {len(todos)} todos using '{template.name}'")
    return GenerateTodosResponse(
        success=True,
        todos=GeneratedTodoList(list_name=template.name, todos=todos),
        template_used=template.id,
        has_wedding_date=has_date,
    )
