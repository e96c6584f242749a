import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import ValidationError

from ..akeneo.client import AkeneoApiError
from ..akeneo.entities import Entity
from ..helpers import Diagnostics, humanize
from ..models import ImportKey, ResourceData, Response, State, Value
from .mapping import Field, to_state, to_wire_payload
from .schema import Schema

logger = logging.getLogger(__name__)


class BaseResource(ABC):
    """
    The abstract base class that defines the contract for all Akeneo resources.

    A resource adapts one Akeneo entity type to the provider lifecycle. It
    declares its schema, the field table used to translate between state and
    the wire representation, and the service calls that read and write the
    entity. The lifecycle operations themselves (create, read, update, delete,
    import) are implemented here once for every entity type.

    Lifecycle operations never raise: every failure is reported as a
    diagnostic on the returned `Response`, and any error diagnostic means the
    operation was aborted.
    """

    # Resource type name as used in configuration, e.g. 'akeneo_attribute'.
    type_name: str = ""
    # Pydantic model of the wire representation.
    entity_class: Type[Entity] = Entity
    fields: Tuple[Field, ...] = ()
    import_key: ImportKey = ImportKey()

    def __init__(self):
        self.resource_data: Optional[ResourceData] = None
        self.service: Any = None

    @property
    def entity_name(self) -> str:
        return humanize(self.type_name)

    @property
    def entity_plural(self) -> str:
        name = self.entity_name
        if name.endswith("y"):
            return name[:-1] + "ies"
        return name + "s"

    @property
    def article(self) -> str:
        return "an" if self.entity_name[:1] in "aeiou" else "a"

    @abstractmethod
    def schema(self) -> Schema:
        """Returns the attribute schema of this resource type."""
        ...

    @abstractmethod
    def build_service(self, client) -> Any:
        """Creates the Akeneo service this resource talks to."""
        ...

    @abstractmethod
    def fetch(self, **identity: str) -> Entity:
        """
        Fetches the entity identified by the `import_key` fields.

        Raises:
            AkeneoApiError: If the request fails.
        """
        ...

    @abstractmethod
    def create_entity(self, entity: Entity, diagnostics: Diagnostics):
        """
        Creates the entity on the Akeneo side. Services that report per-item
        results instead of raising add them to `diagnostics`.
        """
        ...

    @abstractmethod
    def update_entity(self, entity: Entity, diagnostics: Diagnostics):
        ...

    def configure(self, provider_data: Any) -> Diagnostics:
        """
        Receives the data built by the provider's `configure`.

        `None` means the provider has not been configured yet, which is not an
        error: the host may ask for the schema before configuring.
        """
        diagnostics = Diagnostics()
        if provider_data is None:
            return diagnostics

        if not isinstance(provider_data, ResourceData):
            diagnostics.add_error(
                "Unexpected Resource Configure Type",
                f"Expected ResourceData, got: {type(provider_data).__name__}. "
                "Please report this issue to the provider developers.",
            )
            return diagnostics

        if provider_data.client is None:
            diagnostics.add_error(
                "Missing client instance",
                "Client instance passed to Configure is required, got None",
            )
            return diagnostics

        self.resource_data = provider_data
        self.service = self.build_service(provider_data.client)
        return diagnostics

    def validate_config(self, config: State) -> Diagnostics:
        diagnostics = Diagnostics()
        self.schema().validate(config, diagnostics)
        return diagnostics

    def map_to_api_object(
        self, state: State, diagnostics: Diagnostics
    ) -> Optional[Entity]:
        """Builds the wire entity from the known values of `state`."""
        payload = to_wire_payload(self.fields, state, diagnostics)
        if diagnostics.has_error:
            return None
        try:
            return self.entity_class.model_validate(payload)
        except ValidationError as e:
            diagnostics.add_error(
                f"Error while mapping {self.article} {self.entity_name}",
                f"The configuration could not be converted to an Akeneo {self.entity_name}: {e}",
            )
            return None

    def map_to_tf_object(
        self, entity: Entity, state: Optional[State], diagnostics: Diagnostics
    ) -> State:
        """Overlays the server representation of `entity` onto a copy of `state`."""
        base = dict(state) if state else self.schema().empty_state()
        return to_state(self.fields, entity.to_payload(), diagnostics, base)

    def identity(self, state: State) -> Dict[str, str]:
        return {
            name: state.get(name, Value.null()).value for name in self.import_key.fields
        }

    def create(self, plan: State) -> Response:
        return self._write(plan, "creating", self.create_entity)

    def update(self, plan: State) -> Response:
        return self._write(plan, "updating", self.update_entity)

    def read(self, state: State) -> Response:
        response = Response()
        if not self._require_service(response.diagnostics):
            return response

        identity = self.identity(state)
        try:
            entity = self.fetch(**identity)
        except AkeneoApiError as e:
            response.diagnostics.add_error(
                f"Error while reading {self.article} {self.entity_name}",
                f"An unexpected error occurred when reading {self.entity_name}. "
                f"\n\nAkeneo API Error: {e}",
            )
            return response

        if not entity.code:
            logger.info(
                "%s %s no longer exists, removing it from state",
                self.type_name,
                identity,
            )
            return response

        response.state = self.map_to_tf_object(entity, state, response.diagnostics)
        return response

    def delete(self, state: State) -> Response:
        response = Response(state=state)
        response.diagnostics.add_error(
            "This resource does not support deletes",
            "This resource does not support deletes. The Akeneo API does not "
            f"support deletes for {self.entity_plural}.",
        )
        return response

    def import_state(self, import_id: str) -> Response:
        """
        Builds a skeleton state from an import identifier. The host is expected
        to `read` the resource afterwards to fill in the remaining attributes.
        """
        response = Response()
        try:
            identity = self.import_key.parse(import_id)
        except ValueError as e:
            response.diagnostics.add_error("Unexpected Import Identifier", str(e))
            return response

        state = self.schema().empty_state()
        for name, value in identity.items():
            state[name] = Value.of(value)
        response.state = state
        return response

    def _require_service(self, diagnostics: Diagnostics) -> bool:
        if self.service is None:
            diagnostics.add_error(
                "Unconfigured resource",
                f"The {self.type_name} resource was used before the provider was configured.",
            )
            return False
        return True

    def _write(self, plan: State, action: str, write) -> Response:
        response = Response()
        if not self._require_service(response.diagnostics):
            return response

        entity = self.map_to_api_object(plan, response.diagnostics)
        if entity is None:
            return response

        try:
            write(entity, response.diagnostics)
        except AkeneoApiError as e:
            response.diagnostics.add_error(
                f"Error while {action} {self.article} {self.entity_name}",
                f"An unexpected error occurred when {action} {self.entity_name}. "
                f"\n\nAkeneo API Error: {e}",
            )
            return response
        if response.diagnostics.has_error:
            return response

        # Re-read so that values computed or normalised by Akeneo end up in state.
        try:
            current = self.fetch(**self.identity(plan))
        except AkeneoApiError as e:
            logger.warning(
                "Could not refresh %s after %s it: %s", self.type_name, action, e
            )
            response.diagnostics.add_warning(
                f"Unable to refresh {self.entity_name}",
                f"The {self.entity_name} was saved but could not be read back; "
                f"the planned values were stored instead. \n\nAkeneo API Error: {e}",
            )
            response.state = _resolve_unknowns(plan)
            return response

        state = self.map_to_tf_object(current, plan, response.diagnostics)
        response.state = _resolve_unknowns(state)
        return response


def _resolve_unknowns(state: State) -> State:
    """Replaces values the server did not fill in with null, nested lists included."""
    resolved = {}
    for name, value in state.items():
        if value.is_unknown:
            resolved[name] = Value.null()
        elif value.is_known and isinstance(value.value, list) and value.value and all(
            isinstance(item, dict) for item in value.value
        ):
            resolved[name] = Value.of([_resolve_unknowns(item) for item in value.value])
        else:
            resolved[name] = value
    return resolved
