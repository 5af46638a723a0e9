"""
Pytest configuration and fixtures for testing.
"""
import asyncio
import pytest
from datetime import timedelta
from types import SimpleNamespace
from google.api_core.exceptions import AlreadyExists, NotFound
from google.cloud import tasks_v2
from google.cloud.tasks_v2.services.cloud_tasks import pagers
from cloudtaskwrapper.core.client import TaskQueueClient
from cloudtaskwrapper.config import ClientConfig


PROJECT = "test-project"
LOCATION = "us-central1"
QUEUE = "test-queue"
FIXED_NOW = 1_700_000_000.0


class FakeCloudTasksClient:
    """In-memory stand-in for CloudTasksAsyncClient."""

    def __init__(self):
        self.tasks = {}
        self.queues = []
        self.requests = []
        self.fail_create = None
        self.fail_delete = None
        self.page_size = None
        self.transport = SimpleNamespace(close=self._close)
        self.closed = False
        self._counter = 0

    async def _close(self):
        self.closed = True

    async def create_task(self, request):
        await asyncio.sleep(0)
        self.requests.append(("create", request))
        if self.fail_create:
            raise self.fail_create

        task = tasks_v2.Task.deserialize(tasks_v2.Task.serialize(request.task))
        if not task.name:
            self._counter += 1
            task.name = f"{request.parent}/tasks/auto-{self._counter}"
        if task.name in self.tasks:
            raise AlreadyExists(f"Task {task.name} already exists")

        self.tasks[task.name] = task
        return task

    async def get_task(self, request):
        await asyncio.sleep(0)
        self.requests.append(("get", request))
        if request.name not in self.tasks:
            raise NotFound(f"Task {request.name} not found")
        return self.tasks[request.name]

    async def delete_task(self, request):
        await asyncio.sleep(0)
        self.requests.append(("delete", request))
        if self.fail_delete:
            raise self.fail_delete
        if request.name not in self.tasks:
            raise NotFound(f"Task {request.name} not found")
        del self.tasks[request.name]

    async def list_tasks(self, request):
        await asyncio.sleep(0)
        self.requests.append(("list_tasks", request))
        prefix = f"{request.parent}/tasks/"
        tasks = [task for name, task in self.tasks.items() if name.startswith(prefix)]
        first, rest = self._split_page(tasks)

        async def next_page(page_request, **kwargs):
            self.requests.append(("list_tasks_page", page_request))
            return tasks_v2.ListTasksResponse(tasks=rest)

        return pagers.ListTasksAsyncPager(
            next_page,
            request,
            tasks_v2.ListTasksResponse(tasks=first, next_page_token="page-2" if rest else ""),
        )

    async def list_queues(self, request):
        await asyncio.sleep(0)
        self.requests.append(("list_queues", request))
        queues = [queue for queue in self.queues if queue.name.startswith(request.parent + "/")]
        first, rest = self._split_page(queues)

        async def next_page(page_request, **kwargs):
            self.requests.append(("list_queues_page", page_request))
            return tasks_v2.ListQueuesResponse(queues=rest)

        return pagers.ListQueuesAsyncPager(
            next_page,
            request,
            tasks_v2.ListQueuesResponse(queues=first, next_page_token="page-2" if rest else ""),
        )

    def _split_page(self, items):
        if self.page_size is None:
            return items, []
        return items[: self.page_size], items[self.page_size :]


def http_task(body: bytes = b'{"hello": "world"}') -> tasks_v2.Task:
    """Build a task carrying an HTTP request."""
    return tasks_v2.Task(
        http_request=tasks_v2.HttpRequest(
            http_method=tasks_v2.HttpMethod.POST,
            url="https://example.com/handler",
            headers={"Content-Type": "application/json"},
            body=body,
        ),
        dispatch_deadline=timedelta(seconds=300),
    )


def app_engine_task(body: bytes = b"payload") -> tasks_v2.Task:
    """Build a task carrying an App Engine request."""
    return tasks_v2.Task(
        app_engine_http_request=tasks_v2.AppEngineHttpRequest(
            http_method=tasks_v2.HttpMethod.PUT,
            relative_uri="/tasks/process",
            body=body,
        ),
    )


@pytest.fixture(scope="function")
def fake_client():
    """Create a fake Cloud Tasks client."""
    return FakeCloudTasksClient()


@pytest.fixture(scope="function")
def task_client(fake_client):
    """TaskQueueClient wired to the fake client and a fixed clock."""
    return TaskQueueClient(
        ClientConfig(project=PROJECT, location=LOCATION),
        environ={},
        client=fake_client,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture(scope="function")
def task_path():
    """Build a full task path in the test queue."""
    def build(task_id: str, queue: str = QUEUE) -> str:
        return f"projects/{PROJECT}/locations/{LOCATION}/queues/{queue}/tasks/{task_id}"
    return build


@pytest.fixture(scope="function")
def make_http_task():
    """Factory for HTTP request tasks."""
    return http_task


@pytest.fixture(scope="function")
def make_app_engine_task():
    """Factory for App Engine request tasks."""
    return app_engine_task
