#!/usr/bin/env python3
"""Probe the NanoCreatures auth endpoints and print what the server returns.

Useful when sign-in starts failing after a server deploy: shows the status,
the allowed methods and the raw body of each auth route.

Usage:
    uv run python scripts/probe_auth.py
    uv run python scripts/probe_auth.py --base-url http://localhost:3000
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from nanocreatures.client import EndpointProbe, NanoCreaturesClient
from nanocreatures.config import settings

logger = logging.getLogger(__name__)


def format_probe(probe: EndpointProbe) -> str:
    """Format one probe result for display."""
    lines = [
        f"{probe.path}",
        f"  status:  {probe.status_code}",
        f"  allow:   {probe.allow or '-'}",
        f"  body:    {probe.body[:500]}",
    ]
    return "\n".join(lines)


async def run(base_url: str | None) -> int:
    client = NanoCreaturesClient(base_url=base_url)
    print(f"--- probing {client.base_url} ---\n")
    probes = await client.probe_auth_endpoints()
    for probe in probes:
        print(format_probe(probe))
        print()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Probe NanoCreatures auth endpoints")
    parser.add_argument("--base-url", help=f"Service root (default: {settings.base_url})")
    args = parser.parse_args()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level),
    )

    try:
        sys.exit(asyncio.run(run(args.base_url)))
    except Exception:
        logger.exception("Probe failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
