"""Taskboard Client -- API client, cached board and filter engine

Public interface of packages/client.
"""

# API
from .api import TaskApiClient

# Configuration
from .config import ClientConfig, load_client_config

# Exceptions
from .exceptions import ApiError, ApiResponseError, ApiTransportError, ClientError

# Filtering and rendering
from .filters import StatusFilter, filter_records, matches_search, matches_status
from .render import due_label, priority_label, render_record, render_record_list

# Board
from .state import Notification, TaskBoard

__all__ = [
    "TaskApiClient",
    "ClientConfig",
    "load_client_config",
    "ClientError",
    "ApiError",
    "ApiTransportError",
    "ApiResponseError",
    "StatusFilter",
    "filter_records",
    "matches_status",
    "matches_search",
    "due_label",
    "priority_label",
    "render_record",
    "render_record_list",
    "Notification",
    "TaskBoard",
]
