"""Shared configuration: project root, .env loading, and environment-driven options."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from gridtable_html.schema import HandlerOptions

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# Environment variable that turns on header suppression
ENV_NO_HEADER = "GRIDTABLE_NO_HEADER"

_TRUTHY = {"1", "true", "yes", "on"}


def options_from_env() -> HandlerOptions:
    """Build HandlerOptions from the environment (``GRIDTABLE_NO_HEADER``)."""
    raw = os.getenv(ENV_NO_HEADER, "")
    no_header = raw.strip().lower() in _TRUTHY
    if raw and not no_header:
        logger.debug("%s=%r is not a truthy value; header suppression stays off", ENV_NO_HEADER, raw)
    return HandlerOptions(no_header=no_header)
