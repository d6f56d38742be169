#!/usr/bin/env python3
"""
Smoke test a running relay with the MediBot client.

Calls every relay route once and prints what came back. Needs a relay
started with a valid GOOGLE_API_KEY.
"""

import argparse
import asyncio
import logging
import os
from pathlib import Path

import dotenv
from mediguide_relay.client import MediBotAPIError, MediBotClient

# Load environment variables
dotenv.load_dotenv()

# Setup logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def run(base_url: str, medicine: str, image: Path | None):
    client = MediBotClient(base_url)

    try:
        places = await client.search_places("pharmacy near me")
        logger.info(f"Places: status={places.status}, {len(places.results)} results")

        suggestions = await client.suggest_medicines(medicine[:4])
        logger.info(f"Suggestions: {[s.name for s in suggestions]}")

        details = await client.get_medicine_details(medicine)
        logger.info(f"Details: {details.model_dump() if details else None}")

        if image:
            identified = await client.identify_medicine(image.read_bytes())
            logger.info(f"Image: {identified.name if identified else 'no medicine found'}")

        answer = await client.ask(f"What is {medicine} used for?")
        logger.info(f"Chat: {answer}")
    except MediBotAPIError as e:
        logger.error(f"Relay error: {e}")
        raise SystemExit(1) from e


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--base-url",
        default=f"http://localhost:{os.getenv('PORT', '3000')}",
        help="Relay base URL",
    )
    parser.add_argument("--medicine", default="Paracetamol")
    parser.add_argument("--image", type=Path, help="Photo of a medicine package")
    args = parser.parse_args()

    asyncio.run(run(args.base_url, args.medicine, args.image))


if __name__ == "__main__":
    main()
