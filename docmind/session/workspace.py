"""Per-user wiring of the session components."""

from docmind.gateway.client import BackendGateway, get_gateway
from docmind.session.controller import ActiveSessionController
from docmind.session.query import QueryExecutor
from docmind.session.registry import SessionRegistry
from docmind.session.upload import UploadOrchestrator


class Workspace:
    """Registry, controller, uploader and query executor for one browser tab.

    Components share the given gateway; state is never shared between
    workspaces.
    """

    def __init__(self, gateway: BackendGateway | None = None) -> None:
        self.gateway = gateway or get_gateway()
        self.registry = SessionRegistry(self.gateway)
        self.controller = ActiveSessionController(self.gateway, self.registry)
        self.uploader = UploadOrchestrator(self.gateway, self.registry, self.controller)
        self.queries = QueryExecutor(self.gateway, self.controller)
