"""
The Akeneo provider: its configuration schema, the construction of the shared
API client, and the list of resource types it serves.
"""

import importlib.metadata
import logging
from typing import List, Optional, Tuple, Type

from pydantic import BaseModel, Field, ValidationError

from .akeneo.client import AkeneoClient, Connector
from .helpers import PROVIDER_TYPE_NAME, Diagnostics
from .interfaces.resource import BaseResource
from .interfaces.schema import BOOL, LIST, STRING, Attribute, Schema
from .models import ResourceData, State, state_to_raw
from .resource_registry import ResourceRegistry
from .validators import LengthAtLeast, ListValuesAre

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "terraform-provider-akeneo"


def get_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "dev"


class ProviderConfig(BaseModel):
    """The validated provider block."""

    host: str
    unsecure_api: bool = False
    api_username: str
    api_password: str
    api_client_id: str
    api_client_secret: str
    extra_attribute_types: List[str] = Field(default_factory=list)

    @property
    def base_url(self) -> str:
        proto = "http" if self.unsecure_api else "https"
        return f"{proto}://{self.host}"

    @property
    def connector(self) -> Connector:
        return Connector(
            client_id=self.api_client_id,
            secret=self.api_client_secret,
            username=self.api_username,
            password=self.api_password,
        )


class AkeneoProvider:
    type_name = PROVIDER_TYPE_NAME

    def __init__(
        self,
        version: Optional[str] = None,
        registry: Optional[ResourceRegistry] = None,
    ):
        self.version = version or get_version()
        self.registry = registry or ResourceRegistry()

    def metadata(self) -> dict:
        return {"type_name": self.type_name, "version": self.version}

    def schema(self) -> Schema:
        return Schema(
            description="Manage Akeneo PIM structure (attributes, families, channels...) through its REST API.",
            attributes={
                "host": Attribute(
                    STRING,
                    "Akeneo host (optionally with port separated by double colon)",
                    required=True,
                    sensitive=True,
                ),
                "unsecure_api": Attribute(BOOL, "Use http calls to the API"),
                "api_username": Attribute(
                    STRING, "Akeneo API client username", required=True, sensitive=True
                ),
                "api_password": Attribute(
                    STRING, "Akeneo API client password", required=True, sensitive=True
                ),
                "api_client_id": Attribute(
                    STRING, "Akeneo API client ID", required=True, sensitive=True
                ),
                "api_client_secret": Attribute(
                    STRING, "Akeneo API client secret", required=True, sensitive=True
                ),
                "extra_attribute_types": Attribute(
                    LIST,
                    "Extra attribute types that are not supported by default",
                    validators=[ListValuesAre(LengthAtLeast(1))],
                ),
            },
        )

    def configure(self, config: State) -> Tuple[Optional[ResourceData], Diagnostics]:
        """
        Validates the provider block and builds the data shared by all resources.

        Returns:
            The `ResourceData` (or `None` on failure) and the collected diagnostics.
        """
        diagnostics = Diagnostics()
        self.schema().validate(config, diagnostics)
        if diagnostics.has_error:
            return None, diagnostics

        raw = {k: v for k, v in state_to_raw(config).items() if v is not None}
        try:
            provider_config = ProviderConfig.model_validate(raw)
        except ValidationError as e:
            diagnostics.add_error(
                "Invalid provider configuration",
                f"The provider configuration could not be validated: {e}",
            )
            return None, diagnostics

        try:
            client = AkeneoClient(provider_config.connector, provider_config.base_url)
        except ValueError as e:
            diagnostics.add_error(
                "Unable to create client",
                "An unexpected error occurred when creating the Akeneo API client. "
                "If the error is not clear, please contact the provider developers.\n\n"
                f"Akeneo API Client Error: {e}",
            )
            return None, diagnostics

        logger.debug("Configured Akeneo provider as %r", provider_config.connector)
        return (
            ResourceData(
                client=client,
                extra_attribute_types=list(provider_config.extra_attribute_types),
            ),
            diagnostics,
        )

    def resources(self) -> List[Type[BaseResource]]:
        return [self.registry.get(name) for name in self.registry.type_names()]

    def new_resource(self, type_name: str) -> Optional[BaseResource]:
        resource_class = self.registry.get(type_name)
        if resource_class is None:
            return None
        return resource_class()
