"""HTTP gateway to the remote retrieval/QA backend.

Responsibilities:
    - Session lifecycle calls (list, create from upload, history, delete)
    - Question answering calls
    - Converting transport and HTTP failures into the error taxonomy

The backend itself is an external service; this package only speaks to it.
"""

from docmind.gateway.client import BackendGateway, get_gateway
from docmind.gateway.config import GatewayConfig, get_gateway_config
from docmind.gateway.errors import (
    DeleteError,
    FetchError,
    GatewayError,
    QueryError,
    UploadError,
)

__all__ = [
    "BackendGateway",
    "DeleteError",
    "FetchError",
    "GatewayConfig",
    "GatewayError",
    "QueryError",
    "UploadError",
    "get_gateway",
    "get_gateway_config",
]
