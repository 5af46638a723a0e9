"""
Basic usage examples for the Cloud Tasks wrapper.

Requires PROJECT_ID and QUEUE_LOCATION (or a ClientConfig) and
Application Default Credentials with access to the queue.
"""
import asyncio
import json
from google.cloud import tasks_v2
from cloudtaskwrapper import TaskQueueClient
from cloudtaskwrapper.config import ClientConfig


QUEUE = "default"


async def example_1_create_and_fetch(client: TaskQueueClient):
    """Example 1: Create a named HTTP task and fetch it back."""
    print("\n=== Example 1: Create and Fetch ===")
    
    task = tasks_v2.Task(
        http_request=tasks_v2.HttpRequest(
            http_method=tasks_v2.HttpMethod.POST,
            url="https://example.com/hooks/order",
            headers={"Content-Type": "application/json"},
            body=json.dumps({"order_id": 42}).encode(),
        ),
    )
    
    name = await client.create_task(task, QUEUE, "order-42")
    print(f"Created: {name}")
    
    fetched = await client.get_task_by_name("order-42", QUEUE)
    print(f"Body: {fetched.http_request.body!r}")


async def example_2_search(client: TaskQueueClient):
    """Example 2: Find tasks by id pattern."""
    print("\n=== Example 2: Search by Pattern ===")
    
    for task in await client.list_tasks_matching(r"^order-\d+$", QUEUE):
        print(f"  {task.name}")


async def example_3_update(client: TaskQueueClient):
    """Example 3: Replace the body, then push the task back 30 minutes."""
    print("\n=== Example 3: Update Body and Reschedule ===")
    
    result = await client.replace_http_task_body(
        "order-42",
        json.dumps({"order_id": 42, "priority": "high"}),
        QUEUE,
        new_name="order-42-v2",
    )
    print(f"Body replaced: {result.name} ({result.outcome})")
    
    result = await client.reschedule_task("order-42-v2", 30, QUEUE, new_name="order-42-v3")
    print(f"Rescheduled: {result.name} ({result.outcome})")
    
    if not result.replaced:
        print(f"Original still exists: {result.delete_error}")


async def example_4_queues(client: TaskQueueClient):
    """Example 4: List queues."""
    print("\n=== Example 4: List Queues ===")
    
    for queue in await client.list_queues():
        print(f"  {queue.name}")


async def main():
    async with TaskQueueClient(ClientConfig(project="my-project", location="us-central1")) as client:
        await example_1_create_and_fetch(client)
        await example_2_search(client)
        await example_3_update(client)
        await example_4_queues(client)


if __name__ == "__main__":
    asyncio.run(main())
