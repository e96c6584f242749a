#!/usr/bin/env python

import argparse
import json
import logging
import sys

import yaml

from .helpers import DEFAULT_REGISTRY_ADDRESS, Diagnostics
from .provider import AkeneoProvider
from .server import ProviderServer

logger = logging.getLogger(__name__)


def load_requests(path):
    """Loads a request document from a YAML file, or from stdin when `path` is '-'."""
    if path == "-":
        document = yaml.safe_load(sys.stdin)
    else:
        with open(path, "r") as f:
            document = yaml.safe_load(f)

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError("the request document must be a mapping")
    operations = document.get("operations") or []
    if not isinstance(operations, list) or not all(
        isinstance(op, dict) for op in operations
    ):
        raise ValueError("'operations' must be a list of mappings")
    return document


def main(argv=None):
    """
    Main function to parse command-line arguments and serve the requests of a
    document through the Akeneo provider.
    """
    parser = argparse.ArgumentParser(
        prog="terraform-provider-akeneo",
        description="Terraform-style provider for the Akeneo PIM REST API.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose logging.",
    )
    parser.add_argument(
        "--registry",
        default=DEFAULT_REGISTRY_ADDRESS,
        help="Address under which the provider is served.",
    )
    parser.add_argument(
        "requests",
        help="Path to a YAML document with a 'provider' block and an 'operations' list, or '-' for stdin.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    startup = Diagnostics()
    try:
        document = load_requests(args.requests)
    except (IOError, yaml.YAMLError, ValueError) as e:
        logger.error("Could not read request document '%s': %s", args.requests, e)
        startup.add_error("Error reading request document", str(e))
        startup.report()
        return

    provider = AkeneoProvider()
    logger.info("Serving provider %s (version %s)", args.registry, provider.version)

    server = ProviderServer(provider)
    startup.extend(server.configure(document.get("provider")))
    if startup.has_error:
        logger.error("Provider configuration failed")
    startup.report()

    results = [server.handle(request) for request in document.get("operations") or []]
    print(
        json.dumps(
            {
                "provider": args.registry,
                "version": provider.version,
                "results": results,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
