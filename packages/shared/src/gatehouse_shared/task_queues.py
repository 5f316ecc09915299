"""Task queue name constants for each component.

Every component runs on its own Temporal worker with a dedicated task queue.
Callers in other services dispatch activities to these queues by name, so the
constants are the single source of truth shared by the worker runner and by
any workflow that wants to register, log in, or verify a session.
"""

# Credential issuance: register, login, verify
AUTH_QUEUE = "auth-queue"
