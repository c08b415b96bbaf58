"""Protean Engine runner for the storefront domains.

The web app processes commands synchronously; everything that reacts to
events runs here. Most importantly the Reviews engine consumes the Ordering
domain's ``OrderCompleted`` events and opens the Review Gate for them.

Usage:
    python src/server.py                    # Run both domain engines
    python src/server.py --domain ordering  # Run only ordering engine
    python src/server.py --domain reviews   # Run only reviews engine
"""

import argparse
import asyncio
import importlib

import structlog
from protean.server.engine import Engine

logger = structlog.get_logger(__name__)

# Domain name → (module, attribute) of its Domain instance
DOMAINS = {
    "ordering": ("ordering.domain", "ordering"),
    "reviews": ("reviews.domain", "reviews"),
}


def load_domain(name):
    """Import and initialize a domain by name."""
    try:
        module_name, attribute = DOMAINS[name]
    except KeyError:
        raise ValueError(f"Unknown domain: {name}") from None

    domain = getattr(importlib.import_module(module_name), attribute)
    domain.init()
    return domain


async def run(domain_names):
    engines = [Engine(load_domain(name)) for name in domain_names]
    logger.info("Starting engines", domains=domain_names)
    await asyncio.gather(*(engine.run() for engine in engines))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--domain",
        choices=sorted(DOMAINS),
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args(argv)

    from ordering.utils.logging import configure_logging

    configure_logging()

    asyncio.run(run([args.domain] if args.domain else list(DOMAINS)))


if __name__ == "__main__":
    main()
