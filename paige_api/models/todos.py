# paige_api/models/todos.py
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from paige_api.utils.dates import get_utc_now


class TodoItem(BaseModel):
    id: str = Field(..., description="Dense ordinal id within one list: todo-1, todo-2, ...")
    title: str
    note: Optional[str] = None
    category: str = "General"
    deadline: Optional[str] = None
    deadline_reasoning: Optional[str] = Field(None, alias="deadlineReasoning")
    priority: str = "Medium"
    completed: bool = False
    created_at: datetime = Field(default_factory=get_utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=get_utc_now, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# --- Wire models for the todo generation endpoint ---
class GeneratedTodo(BaseModel):
    id: str
    name: str
    note: Optional[str] = None
    category: Optional[str] = ""
    priority: Optional[str] = "Medium"
    is_completed: bool = Field(False, alias="isCompleted")
    deadline: Optional[str] = None
    deadline_reasoning: Optional[str] = Field(None, alias="deadlineReasoning")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GeneratedTodoList(BaseModel):
    list_name: Optional[str] = Field(None, alias="listName")
    todos: List[GeneratedTodo] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GenerateTodosResponse(BaseModel):
    success: bool = True
    todos: GeneratedTodoList
    template_used: Optional[str] = Field(None, alias="templateUsed")
    has_wedding_date: bool = Field(False, alias="hasWeddingDate")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
