"""
Client-side planner state and the HTTP storage adapter it talks through.
"""

from client.storage import PlannerAPIClient, StorageError
from client.state import PlannerState

__all__ = ["PlannerAPIClient", "StorageError", "PlannerState"]
