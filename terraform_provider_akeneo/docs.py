"""
Renders the Markdown reference documentation of the provider and of every
resource type from their schemas.
"""

import argparse
import logging
import os
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader

from .helpers import PROVIDER_TYPE_NAME, SCHEMA_TYPE_DOC_NAMES
from .interfaces.resource import BaseResource
from .interfaces.schema import Attribute, Schema
from .provider import AkeneoProvider

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

logger = logging.getLogger(__name__)


def describe_attributes(attributes: Dict[str, Attribute]) -> List[dict]:
    return [
        {
            "name": name,
            "type": SCHEMA_TYPE_DOC_NAMES[attribute.type],
            "description": attribute.description,
            "required": attribute.required,
            "sensitive": attribute.sensitive,
        }
        for name, attribute in sorted(attributes.items())
    ]


def _nested_blocks(attributes: Dict[str, Attribute], prefix: str = "") -> List[dict]:
    blocks = []
    for name, attribute in sorted(attributes.items()):
        if attribute.nested is None:
            continue
        path = f"{prefix}{name}"
        blocks.append(
            {
                "path": path,
                "anchor": path.replace(".", "--"),
                "attributes": describe_attributes(attribute.nested),
            }
        )
        blocks.extend(_nested_blocks(attribute.nested, f"{path}."))
    return blocks


class DocsGenerator:
    """Builds the template context of each page and writes the rendered files."""

    def __init__(self, provider: AkeneoProvider, template_dir: str = TEMPLATE_DIR):
        self.provider = provider
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir), trim_blocks=True, lstrip_blocks=True
        )

    def resource_context(self, resource: BaseResource) -> dict:
        schema: Schema = resource.schema()
        attributes = describe_attributes(schema.attributes)
        return {
            "provider_name": PROVIDER_TYPE_NAME,
            "type_name": resource.type_name,
            "description": schema.description,
            "required": [a for a in attributes if a["required"]],
            "optional": [a for a in attributes if not a["required"]],
            "nested": _nested_blocks(schema.attributes),
            "import_format": resource.import_key.format_hint(),
        }

    def render_resource(self, resource: BaseResource) -> str:
        return self.jinja_env.get_template("resource.md.j2").render(
            self.resource_context(resource)
        )

    def render_index(self) -> str:
        schema = self.provider.schema()
        return self.jinja_env.get_template("index.md.j2").render(
            provider_name=PROVIDER_TYPE_NAME,
            description=schema.description,
            attributes=describe_attributes(schema.attributes),
            resources=self.provider.registry.type_names(),
        )

    def generate(self, output_dir: str) -> List[str]:
        """Writes `index.md` and one page per resource type; returns the written paths."""
        resources_dir = os.path.join(output_dir, "resources")
        os.makedirs(resources_dir, exist_ok=True)

        written = []
        index_path = os.path.join(output_dir, "index.md")
        with open(index_path, "w") as f:
            f.write(self.render_index())
        written.append(index_path)

        prefix = f"{PROVIDER_TYPE_NAME}_"
        for resource_class in self.provider.resources():
            resource = resource_class()
            file_name = resource.type_name
            if file_name.startswith(prefix):
                file_name = file_name[len(prefix):]
            output_path = os.path.join(resources_dir, f"{file_name}.md")
            with open(output_path, "w") as f:
                f.write(self.render_resource(resource))
            logger.info("Generated documentation: %s", output_path)
            written.append(output_path)
        return written


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="terraform-provider-akeneo-docs",
        description="Generate the Markdown reference documentation of the Akeneo provider.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--output-dir",
        default="docs",
        help="Directory to save the generated documentation.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    generator = DocsGenerator(AkeneoProvider())
    written = generator.generate(args.output_dir)
    print(f"\nGenerated {len(written)} documentation files in {args.output_dir}.")


if __name__ == "__main__":
    main()
