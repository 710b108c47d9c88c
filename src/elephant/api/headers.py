"""Alert headers consumed by the client UI for toast notifications.

Success alerts carry a readable message and the entity id; failure alerts
carry an ``error.<key>`` translation key and the entity name. Header names
are prefixed with the configured application name, e.g.
``X-elegantElephantApp-alert``.
"""

from __future__ import annotations

import structlog

from src.elephant.config import get_settings

logger = structlog.get_logger(__name__)


def _prefix() -> str:
    return f"X-{get_settings().APP_NAME}"


def create_alert(message: str, param: str) -> dict[str, str]:
    prefix = _prefix()
    return {f"{prefix}-alert": message, f"{prefix}-params": param}


def create_entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"A new {entity_name} is created with identifier {param}", param)


def create_entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"A {entity_name} is updated with identifier {param}", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"A {entity_name} is deleted with identifier {param}", param)


def create_failure_alert(entity_name: str, error_key: str, default_message: str) -> dict[str, str]:
    """Failure alert for a rejected request; the message itself is only logged."""
    logger.error(
        "rest.entity_processing_failed",
        entity=entity_name,
        error_key=error_key,
        message=default_message,
    )
    prefix = _prefix()
    return {f"{prefix}-error": f"error.{error_key}", f"{prefix}-params": entity_name}
