#!/usr/bin/env python3
"""Check that a Utility Bill Pay environment is reachable before a test run.

Runs the health check, reads one page of invoices and walks a few pages of
the cursor pagination. Nothing is created.

Usage:
    python scripts/check_environment.py
    python scripts/check_environment.py -v                    # print sample invoices
    python scripts/check_environment.py --api-url <URL>       # custom target
    python scripts/check_environment.py --pages 5 --limit 20  # walk more of the list
"""

import argparse
import asyncio
import os
import sys
from collections import Counter
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

# Load target URLs from .env.test next to this script, if present
SCRIPT_DIR = Path(__file__).parent
load_dotenv(SCRIPT_DIR / ".env.test")

from harness.core.config import load_settings
from harness.core.errors import HarnessError
from harness.core.logging import setup_logging
from harness.services.api_client import BillPayClient


async def check_health(client: BillPayClient) -> bool:
    """Check GET /health."""
    print("\n" + "=" * 60)
    print("Checking health endpoint...")
    print("=" * 60)

    try:
        healthy = await client.health_check()
    except HarnessError as e:
        print(f"❌ Cannot reach {client.base_url}: {e}")
        return False

    if healthy:
        print(f"✅ {client.base_url} is healthy")
    else:
        print(f"❌ {client.base_url}/health did not return 2xx")
    return healthy


async def check_listing(client: BillPayClient, limit: int, pages: int, verbose: bool) -> bool:
    """Read a few pages of invoices and summarize their statuses."""
    print("\n" + "=" * 60)
    print(f"Reading up to {pages} page(s) of {limit} invoices...")
    print("=" * 60)

    statuses: Counter = Counter()
    try:
        async for invoice in client.iter_invoices(page_size=limit, max_pages=pages):
            statuses[invoice.status.value] += 1
            if verbose:
                print(f"   {invoice.id:<40} {invoice.status.value:<8} {invoice.amount_minor:>10} {invoice.currency}")
    except HarnessError as e:
        print(f"❌ Listing failed: {e}")
        return False

    total = sum(statuses.values())
    print(f"✅ Retrieved {total} invoices")
    for status, count in sorted(statuses.items()):
        print(f"   {status}: {count}")
    return True


async def main() -> int:
    parser = argparse.ArgumentParser(description="Check a Utility Bill Pay environment")
    parser.add_argument("--api-url", help="API base URL (default: BILLPAY_API_BASE_URL)")
    parser.add_argument("--limit", type=int, default=10, help="Page size for listing")
    parser.add_argument("--pages", type=int, default=2, help="Maximum pages to read")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print sample invoices")
    args = parser.parse_args()

    overrides = {"api_base_url": args.api_url} if args.api_url else {}
    settings = load_settings(**overrides)
    setup_logging(debug=settings.debug)

    async with BillPayClient.from_settings(settings) as client:
        if not await check_health(client):
            return 1
        if not await check_listing(client, args.limit, args.pages, args.verbose):
            return 1

    print("\nEnvironment looks usable.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
