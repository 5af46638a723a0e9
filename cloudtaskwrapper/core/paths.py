"""
Resource path helpers for Cloud Tasks names.
"""
from google.cloud import tasks_v2


TASK_PATH_PREFIX = "projects/"


def is_qualified(name: str) -> bool:
    """Check if a name is already a fully-qualified resource path."""
    return name.startswith(TASK_PATH_PREFIX)


def queue_path(project: str, location: str, queue: str) -> str:
    """Build projects/{project}/locations/{location}/queues/{queue}."""
    return tasks_v2.CloudTasksAsyncClient.queue_path(project, location, queue)


def location_path(project: str, location: str) -> str:
    """Build projects/{project}/locations/{location}."""
    return tasks_v2.CloudTasksAsyncClient.common_location_path(project, location)


def task_path(project: str, location: str, queue: str, name: str) -> str:
    """
    Qualify a task name into the given queue.
    
    A bare task id is expanded to
    projects/{project}/locations/{location}/queues/{queue}/tasks/{name}.
    A name that is already fully qualified is returned unchanged.
    
    Args:
        project: Project id
        location: Location id
        queue: Queue id
        name: Bare task id or full task path
        
    Returns:
        Fully-qualified task path
    """
    if is_qualified(name):
        return name
    return tasks_v2.CloudTasksAsyncClient.task_path(project, location, queue, name)


def task_id(name: str) -> str:
    """Return the trailing segment of a task name."""
    return name.rsplit("/", 1)[-1]
