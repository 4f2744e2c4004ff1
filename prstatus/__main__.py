"""Run prstatus once for the triggering pull request: ``python -m prstatus``."""

import asyncio
import logging
import os
import sys

from prstatus.logging import configure_logging
from prstatus.runner import main

if __name__ == "__main__":
    # RUNNER_DEBUG is set by GitHub Actions when step debug logging is enabled
    debug = os.environ.get("RUNNER_DEBUG") == "1"
    configure_logging(level=logging.DEBUG if debug else logging.INFO)
    sys.exit(asyncio.run(main()))
