"""
Cloud Tasks client with helper operations.
"""
import re
from typing import List, Mapping, Optional, Union
from google.api_core.exceptions import GoogleAPICallError
from google.cloud import tasks_v2
from cloudtaskwrapper.core import paths
from cloudtaskwrapper.core.task import (
    ReplaceOutcome,
    ReplaceResult,
    TaskVariant,
    copy_task,
    set_body,
    set_schedule_time,
)
from cloudtaskwrapper.utils.clock import Clock, schedule_in_minutes, system_clock
from cloudtaskwrapper.utils.logger import log
from cloudtaskwrapper.config import ClientConfig, resolve_config, settings


class ConfigurationError(Exception):
    """Raised when project or location cannot be resolved."""
    pass


class TaskQueueClient:
    """
    Wrapper around the Cloud Tasks async client.

    Builds resource paths for a fixed project and location and forwards
    each operation to the remote service. Remote errors are re-raised
    unchanged. Updates are performed as fetch, copy, create, delete
    sequences since tasks cannot be mutated in place.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        client: Optional[tasks_v2.CloudTasksAsyncClient] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Project and location (default: from settings)
            environ: Environment snapshot overriding config (default: os.environ)
            client: Cloud Tasks async client (default: a new one)
            clock: Time source in epoch seconds (default: system clock)

        Raises:
            ConfigurationError: If project or location is missing
        """
        if config is None:
            config = ClientConfig(
                project=settings.project_id,
                location=settings.queue_location,
            )

        resolved = resolve_config(config, environ)
        if not resolved.project or not resolved.location:
            raise ConfigurationError(
                "Both project and location are required "
                "(set PROJECT_ID and QUEUE_LOCATION or pass a ClientConfig)"
            )

        self.project = resolved.project
        self.location = resolved.location
        self.client = client or tasks_v2.CloudTasksAsyncClient()
        self.clock = clock or system_clock

        log.bind(project=self.project, location=self.location).info(
            "Initialized Cloud Tasks client"
        )

    async def __aenter__(self) -> "TaskQueueClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.client.transport.close()
        log.debug("Closed Cloud Tasks transport")

    def queue_path(self, queue: str) -> str:
        """Get the full resource path of a queue."""
        return paths.queue_path(self.project, self.location, queue)

    def task_path(self, queue: str, name: str) -> str:
        """Get the full resource path of a task (bare ids are qualified)."""
        return paths.task_path(self.project, self.location, queue, name)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def create_task(
        self,
        task: tasks_v2.Task,
        queue: str,
        name: Optional[str] = None,
    ) -> str:
        """
        Create a task in a queue.

        Args:
            task: Task to submit, sent as populated by the caller
            queue: Queue id
            name: Task name (default: assigned by the service)

        Returns:
            Name of the created task
        """
        if name:
            task.name = self.task_path(queue, name)

        request = tasks_v2.CreateTaskRequest(
            parent=self.queue_path(queue),
            task=task,
        )

        try:
            response = await self.client.create_task(request=request)
        except GoogleAPICallError as e:
            log.error(f"Failed to create task in queue {queue}: {e}")
            raise

        log.bind(queue=queue).info(f"Created task {response.name}")
        return response.name

    async def get_task_by_name(self, name: str, queue: str) -> tasks_v2.Task:
        """
        Fetch the FULL view of a task, including its payload body.

        Args:
            name: Task id or full task path
            queue: Queue id

        Returns:
            Task
        """
        request = tasks_v2.GetTaskRequest(
            name=self.task_path(queue, name),
            response_view=tasks_v2.Task.View.FULL,
        )

        try:
            return await self.client.get_task(request=request)
        except GoogleAPICallError as e:
            log.error(f"Failed to get task {name} from queue {queue}: {e}")
            raise

    async def delete_task_by_name(self, name: str, queue: str) -> None:
        """Delete a task by id or full path."""
        request = tasks_v2.DeleteTaskRequest(name=self.task_path(queue, name))

        try:
            await self.client.delete_task(request=request)
        except GoogleAPICallError as e:
            log.error(f"Failed to delete task {name} from queue {queue}: {e}")
            raise

        log.info(f"Deleted task {request.name}")

    async def list_tasks(self, queue: str) -> List[tasks_v2.Task]:
        """
        List the tasks of a queue.

        Only the first page returned by the service is read.

        Args:
            queue: Queue id

        Returns:
            Tasks in the order the service listed them
        """
        request = tasks_v2.ListTasksRequest(parent=self.queue_path(queue))

        try:
            pager = await self.client.list_tasks(request=request)
        except GoogleAPICallError as e:
            log.error(f"Failed to list tasks of queue {queue}: {e}")
            raise

        return list(pager.tasks)

    async def list_tasks_matching(self, pattern: str, queue: str) -> List[tasks_v2.Task]:
        """
        List tasks whose id matches a regular expression.

        The pattern is searched (not fully matched) against the last
        segment of each task name.

        Args:
            pattern: Regular expression
            queue: Queue id

        Returns:
            Matching tasks in the order the service listed them

        Raises:
            re.error: If the pattern is invalid
        """
        regex = re.compile(pattern)
        tasks = await self.list_tasks(queue)

        matched = [task for task in tasks if regex.search(paths.task_id(task.name))]

        log.bind(queue=queue, pattern=pattern).debug(
            f"Matched {len(matched)} of {len(tasks)} tasks"
        )
        return matched

    async def replace_task_body(
        self,
        name: str,
        body: Union[str, bytes],
        queue: str,
        new_name: Optional[str] = None,
        variant: Optional[TaskVariant] = None,
    ) -> ReplaceResult:
        """
        Replace a task with a copy carrying a new request body.

        Args:
            name: Task id or full path of the existing task
            body: New request body
            queue: Queue id
            new_name: Name of the replacement (default: the original's name)
            variant: Payload variant the task must carry (default: any)

        Returns:
            ReplaceResult

        Raises:
            TaskVariantError: If the task carries no payload or another variant
        """
        existing = await self.get_task_by_name(name, queue)

        task = copy_task(existing)
        if new_name:
            task.name = self.task_path(queue, new_name)
        set_body(task, body, variant)

        return await self._replace(task, name, queue)

    async def replace_http_task_body(
        self,
        name: str,
        body: Union[str, bytes],
        queue: str,
        new_name: Optional[str] = None,
    ) -> ReplaceResult:
        """Replace the body of a task carrying an HTTP request."""
        return await self.replace_task_body(name, body, queue, new_name, TaskVariant.HTTP)

    async def replace_app_engine_task_body(
        self,
        name: str,
        body: Union[str, bytes],
        queue: str,
        new_name: Optional[str] = None,
    ) -> ReplaceResult:
        """Replace the body of a task carrying an App Engine request."""
        return await self.replace_task_body(
            name, body, queue, new_name, TaskVariant.APP_ENGINE
        )

    async def reschedule_task(
        self,
        name: str,
        minutes_from_now: float,
        queue: str,
        new_name: Optional[str] = None,
    ) -> ReplaceResult:
        """
        Replace a task with a copy scheduled minutes from now.

        Works for both payload variants.

        Args:
            name: Task id or full path of the existing task
            minutes_from_now: Delay from the current clock time
            queue: Queue id
            new_name: Name of the replacement (default: the original's name)

        Returns:
            ReplaceResult
        """
        existing = await self.get_task_by_name(name, queue)

        task = copy_task(existing)
        if new_name:
            task.name = self.task_path(queue, new_name)
        set_schedule_time(task, schedule_in_minutes(minutes_from_now, self.clock))

        return await self._replace(task, name, queue)

    async def _replace(self, task: tasks_v2.Task, name: str, queue: str) -> ReplaceResult:
        """
        Create the replacement task, then delete the original.

        A failed create propagates and leaves the original untouched.
        A failed delete is reported as a DUPLICATED outcome.
        """
        original_path = self.task_path(queue, name)
        created_name = await self.create_task(task, queue)

        try:
            await self.delete_task_by_name(original_path, queue)
        except GoogleAPICallError as e:
            log.bind(original=original_path, error=str(e)).warning(
                f"Replacement {created_name} created but original could not be deleted"
            )
            return ReplaceResult(
                outcome=ReplaceOutcome.DUPLICATED,
                name=created_name,
                original_name=original_path,
                delete_error=e,
            )

        return ReplaceResult(
            outcome=ReplaceOutcome.REPLACED,
            name=created_name,
            original_name=original_path,
        )

    # ------------------------------------------------------------------
    # Queues
    # ------------------------------------------------------------------

    async def list_queues(self) -> List[tasks_v2.Queue]:
        """
        List the queues of the configured project and location.

        Only the first page returned by the service is read.

        Returns:
            Queues in the order the service listed them
        """
        request = tasks_v2.ListQueuesRequest(
            parent=paths.location_path(self.project, self.location),
        )

        try:
            pager = await self.client.list_queues(request=request)
        except GoogleAPICallError as e:
            log.error(f"Failed to list queues: {e}")
            raise

        return list(pager.queues)
