"""Entry point for looking up a single station."""

import logging

from airkorea.errors import ExtractionError
from airkorea.job import load_settings, search


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    settings = load_settings()
    try:
        status = search(settings["longitude"], settings["latitude"], settings=settings)
    except ExtractionError as exc:
        logging.error("Extraction failed: %s", exc)
        logging.info("Suggestion: %s", exc.suggestion)
        return

    print(f"Station address: {status.station_address}")
    print(f"Observed at: {status.observed_at}")
    for pollutant in status:
        print(pollutant)


if __name__ == "__main__":
    main()
