"""Entry point that runs a single HTTP lookup from the command line."""

import json
import logging
import os
import sys

from http_lookup import HttpPollingClient, JsonResponseDecoder, LookupArg, LookupStatus, Settings


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _parse_lookup_args(raw_args: list[str]) -> list[LookupArg]:
    lookup_args = []
    for raw in raw_args:
        name, separator, value = raw.partition("=")
        if not separator or not name.strip():
            raise ValueError(f"Lookup argument '{raw}' must look like name=value.")
        lookup_args.append(LookupArg(name.strip(), value))
    return lookup_args


def main(argv: list[str] | None = None) -> int:
    """Look up the record for name=value arguments and print it as JSON."""
    _configure_logging()
    logger = logging.getLogger("http-lookup")
    lookup_args = _parse_lookup_args(sys.argv[1:] if argv is None else argv)
    settings = Settings.load()

    with HttpPollingClient.from_settings(settings, JsonResponseDecoder()) as client:
        result = client.lookup(lookup_args)

    if result.status is LookupStatus.FOUND:
        print(json.dumps(result.record, indent=2))
        return 0
    logger.info("No record returned (%s): %s", result.status.value, result.reason)
    return 1


if __name__ == "__main__":
    sys.exit(main())
