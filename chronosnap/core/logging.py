"""
Purpose:
- One place to configure stdlib logging for the API process.
- Modules log through logging.getLogger(__name__); nothing else calls basicConfig.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO; keep the beacon quiet
    logging.getLogger("httpx").setLevel(logging.WARNING)
