from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskFields(BaseModel):
    """Document schema applied by the task store.

    Unknown keys are dropped and numbers are accepted for text fields, the
    same coercion a schemaful document store applies before persisting.
    """

    model_config = ConfigDict(
        extra="ignore",
        coerce_numbers_to_str=True,
        use_enum_values=True,
        validate_default=True,
        from_attributes=True,
    )

    title: str = ""
    description: str = ""
    priority: Priority = Priority.LOW
    completed: bool = False


class Task(TaskFields):
    id: str


class MessageResponse(BaseModel):
    message: str
    error: Optional[str] = None
