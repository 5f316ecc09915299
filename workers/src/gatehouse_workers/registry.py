"""Component registry: maps component names to their activities.

This is the lookup table the runner uses to determine what to register on a
worker based on the CLI argument. Each component entry specifies:

- task_queue: Which Temporal task queue this worker polls
- workflows: Workflow classes to register
- activities: Activity functions to register
"""

from dataclasses import dataclass, field
from typing import Any

from gatehouse_auth.activities import login_user, register_user, verify_token
from gatehouse_shared.task_queues import AUTH_QUEUE


@dataclass
class ComponentConfig:
    """Configuration for a single component's worker."""

    task_queue: str
    workflows: list[Any] = field(default_factory=list)
    activities: list[Any] = field(default_factory=list)


COMPONENTS: dict[str, ComponentConfig] = {
    "auth": ComponentConfig(
        task_queue=AUTH_QUEUE,
        activities=[register_user, login_user, verify_token],
    ),
}
