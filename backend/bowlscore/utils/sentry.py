import logging
import os
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from ..config import env_fraction

logger = logging.getLogger(__name__)


def sentry_options() -> Optional[Dict[str, Any]]:
    """Keyword arguments for ``sentry_sdk.init``; ``None`` without a DSN."""
    dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not dsn:
        return None
    return {
        "dsn": dsn,
        "environment": (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None,
        "traces_sample_rate": env_fraction("SENTRY_TRACES_SAMPLE_RATE", 0.0),
        "profiles_sample_rate": env_fraction("SENTRY_PROFILES_SAMPLE_RATE", 0.0),
    }


def init_sentry() -> bool:
    options = sentry_options()
    if options is None:
        logger.info("SENTRY_DSN not provided; skipping Sentry initialization.")
        return False

    sentry_sdk.init(integrations=[FastApiIntegration()], **options)
    logger.info("Initialized Sentry (environment=%s)", options["environment"])
    return True
