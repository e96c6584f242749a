import importlib.metadata
import logging
from typing import Dict, List, Optional, Type

from .interfaces.resource import BaseResource
from .resources.association_type import AssociationTypeResource
from .resources.attribute import AttributeResource
from .resources.attribute_group import AttributeGroupResource
from .resources.attribute_option import AttributeOptionResource
from .resources.category import CategoryResource
from .resources.channel import ChannelResource
from .resources.family import FamilyResource
from .resources.family_variant import FamilyVariantResource
from .resources.measurement_family import MeasurementFamilyResource

# Entry point group through which other packages can contribute resource types.
ENTRY_POINT_GROUP = "terraform_provider_akeneo.resources"

BUILTIN_RESOURCES: List[Type[BaseResource]] = [
    AttributeResource,
    AttributeOptionResource,
    AttributeGroupResource,
    CategoryResource,
    ChannelResource,
    FamilyResource,
    FamilyVariantResource,
    AssociationTypeResource,
    MeasurementFamilyResource,
]

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Keeps track of every resource type the provider serves."""

    def __init__(self, load_entry_points: bool = True):
        self.resources: Dict[str, Type[BaseResource]] = {}
        for resource_class in BUILTIN_RESOURCES:
            self.register(resource_class)
        if load_entry_points:
            self._load_entry_points()

    def register(self, resource_class: Type[BaseResource]):
        type_name = resource_class.type_name
        if not type_name:
            raise ValueError(f"{resource_class.__name__} does not define a type_name")
        if type_name in self.resources:
            logger.info("Replacing resource type '%s'", type_name)
        self.resources[type_name] = resource_class

    def _load_entry_points(self):
        """
        Discovers and loads additional resource types using importlib.metadata.
        """
        entry_points = importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)

        for entry_point in entry_points:
            try:
                resource_class = entry_point.load()
                if not (
                    isinstance(resource_class, type)
                    and issubclass(resource_class, BaseResource)
                ):
                    raise TypeError(f"{resource_class!r} is not a BaseResource subclass")
                self.register(resource_class)
                logger.info(
                    "Registered resource '%s' for type: '%s'",
                    entry_point.name,
                    resource_class.type_name,
                )

            except Exception as e:
                logger.warning("Could not load resource '%s': %s", entry_point.name, e)

    def get(self, type_name: str) -> Optional[Type[BaseResource]]:
        """Returns the registered resource class for a given type name."""
        return self.resources.get(type_name)

    def type_names(self) -> List[str]:
        return sorted(self.resources)
