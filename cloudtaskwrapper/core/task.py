"""
Task payload variants and replacement results.
"""
from enum import Enum
from typing import Optional, Union
from google.api_core.exceptions import GoogleAPICallError
from google.cloud import tasks_v2
from google.protobuf import timestamp_pb2
from pydantic import BaseModel, ConfigDict


class TaskVariantError(Exception):
    """Raised when a task does not carry the expected payload variant."""
    pass


class TaskVariant(str, Enum):
    """Payload variants of a Cloud Task (the message_type oneof)."""
    HTTP = "http_request"
    APP_ENGINE = "app_engine_http_request"


class ReplaceOutcome(str, Enum):
    """Outcome of a recreate-then-delete sequence."""
    REPLACED = "replaced"
    DUPLICATED = "duplicated"


class ReplaceResult(BaseModel):
    """
    Result of replacing a task with a modified copy.
    
    A DUPLICATED outcome means the replacement was created but the
    original could not be deleted, so both tasks exist. delete_error
    holds the remote error exactly as raised.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)
    
    outcome: ReplaceOutcome
    name: str
    original_name: str
    delete_error: Optional[GoogleAPICallError] = None
    
    @property
    def replaced(self) -> bool:
        """Check if the original task is gone."""
        return self.outcome == ReplaceOutcome.REPLACED


def get_variant(task: tasks_v2.Task) -> Optional[TaskVariant]:
    """
    Get the payload variant a task carries.
    
    Args:
        task: Cloud Task
        
    Returns:
        TaskVariant, or None if no payload is set
    """
    which = tasks_v2.Task.pb(task).WhichOneof("message_type")
    if which is None:
        return None
    return TaskVariant(which)


def copy_task(task: tasks_v2.Task) -> tasks_v2.Task:
    """Return an independent copy of every field of a task."""
    return tasks_v2.Task.deserialize(tasks_v2.Task.serialize(task))


def set_body(
    task: tasks_v2.Task,
    body: Union[str, bytes],
    variant: Optional[TaskVariant] = None,
) -> TaskVariant:
    """
    Overwrite the request body of a task in place.
    
    Args:
        task: Task to mutate
        body: New body (str is UTF-8 encoded)
        variant: Expected payload variant (default: whatever the task carries)
        
    Returns:
        The variant that was mutated
        
    Raises:
        TaskVariantError: If the task has no payload or a different variant
    """
    actual = get_variant(task)
    
    if actual is None:
        raise TaskVariantError(f"Task {task.name} has no request payload")
    
    if variant is not None and TaskVariant(variant) != actual:
        raise TaskVariantError(
            f"Task {task.name} carries {actual.value}, not {TaskVariant(variant).value}"
        )
    
    if isinstance(body, str):
        body = body.encode("utf-8")
    
    getattr(task, actual.value).body = body
    return actual


def set_schedule_time(task: tasks_v2.Task, epoch_seconds: int) -> None:
    """Set the schedule time of a task to an absolute epoch second."""
    task.schedule_time = timestamp_pb2.Timestamp(seconds=epoch_seconds)
