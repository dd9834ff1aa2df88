"""Optional-column detection, done once per process.

Older databases were migrated without ``chart_of_accounts.sub_type``. Instead
of probing the column on every request, the inspector is consulted once and
the answer is cached for the lifetime of the process.
"""

import logging

from sqlalchemy import inspect

logger = logging.getLogger(__name__)

_capabilities = {}


def detect(bind) -> dict:
    """Inspect the live schema and cache what it supports."""
    columns = {c["name"] for c in inspect(bind).get_columns("chart_of_accounts")}
    _capabilities["account_sub_type"] = "sub_type" in columns
    logger.info(f"Schema capabilities detected: {_capabilities}")
    return dict(_capabilities)


def account_sub_type_supported(bind) -> bool:
    if "account_sub_type" not in _capabilities:
        detect(bind)
    return _capabilities["account_sub_type"]


def reset():
    _capabilities.clear()
