"""Entry point when running as a script."""

import logging

from graph_memory.server import run_sync

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("graph-memory")

if __name__ == "__main__":
    logger.debug("Running graph-memory as a script")
    run_sync()
