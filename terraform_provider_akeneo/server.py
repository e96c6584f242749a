"""
In-process host for the provider.

The server plays the part of the Terraform core: it configures the provider
once, hands the resulting `ResourceData` to each resource it instantiates, and
dispatches lifecycle requests expressed as plain data:

    {"operation": "create", "resource": "akeneo_category",
     "config": {"code": "shoes", "parent": "master"}}

Every request yields `{"state": ..., "diagnostics": [...]}`.
"""

import logging
from typing import Any, Dict, Optional

from .helpers import Diagnostics
from .interfaces.resource import BaseResource
from .models import ResourceData, Response
from .provider import AkeneoProvider

logger = logging.getLogger(__name__)

OPERATIONS = ("create", "read", "update", "delete", "import")


class ProviderServer:
    def __init__(self, provider: AkeneoProvider):
        self.provider = provider
        self.resource_data: Optional[ResourceData] = None
        self._resources: Dict[str, BaseResource] = {}

    def configure(self, raw_config: Optional[Dict[str, Any]]) -> Diagnostics:
        diagnostics = Diagnostics()
        config = self.provider.schema().decode(raw_config, diagnostics)
        if diagnostics.has_error:
            return diagnostics

        resource_data, configure_diagnostics = self.provider.configure(config)
        diagnostics.extend(configure_diagnostics)
        self.resource_data = resource_data
        # Resources configured against a previous provider block are stale.
        self._resources = {}
        return diagnostics

    def resource(self, type_name: str, diagnostics: Diagnostics) -> Optional[BaseResource]:
        if type_name in self._resources:
            return self._resources[type_name]

        resource = self.provider.new_resource(type_name)
        if resource is None:
            diagnostics.add_error(
                "Unknown resource type",
                f"The provider does not support the resource type '{type_name}'. "
                f"Supported types: {', '.join(self.provider.registry.type_names())}",
            )
            return None

        diagnostics.extend(resource.configure(self.resource_data))
        if diagnostics.has_error:
            return None
        self._resources[type_name] = resource
        return resource

    def handle(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Runs one lifecycle request and returns its outcome as plain data."""
        operation = request.get("operation")
        type_name = request.get("resource")
        logger.debug("Handling %s of %s", operation, type_name)

        response = Response()
        if operation not in OPERATIONS:
            response.diagnostics.add_error(
                "Unsupported operation",
                f"Operation must be one of {', '.join(OPERATIONS)}, got: {operation!r}",
            )
            return response.to_dict()

        resource = self.resource(type_name, response.diagnostics)
        if resource is None:
            return response.to_dict()

        return self._dispatch(resource, operation, request).to_dict()

    def _dispatch(
        self, resource: BaseResource, operation: str, request: Dict[str, Any]
    ) -> Response:
        if operation == "import":
            imported = resource.import_state(str(request.get("id", "")))
            if imported.diagnostics.has_error:
                return imported
            return resource.read(imported.state)

        schema = resource.schema()
        diagnostics = Diagnostics()

        if operation in ("create", "update"):
            plan = schema.decode(request.get("config"), diagnostics)
            if not diagnostics.has_error:
                diagnostics.extend(resource.validate_config(plan))
            if diagnostics.has_error:
                return Response(diagnostics=diagnostics)
            if operation == "create":
                return resource.create(plan)
            return resource.update(plan)

        state = schema.decode(request.get("state"), diagnostics)
        if diagnostics.has_error:
            return Response(diagnostics=diagnostics)
        if operation == "read":
            return resource.read(state)
        return resource.delete(state)
