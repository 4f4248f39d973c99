"""Status tool for MCP server.

Reports engine readiness: registered capsules, assemblers and the
effective configuration.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from forge.config import EnvVar, get_environment, get_max_workers
from forge.schema import Target
from forge.targets import list_assemblers

from ..lib import get_registry, get_server_version

logger = logging.getLogger(__name__)


def get_status() -> dict[str, Any]:
    """Get engine status.

    Returns:
        Dictionary with:
        - status: "healthy" when every target has an assembler, else "degraded"
        - version: Server version
        - checked_at: ISO timestamp
        - capsules: Registered capsule type ids
        - targets: Targets with an assembler
        - missing_targets: Targets without one
        - config: Effective engine configuration
    """
    registry = get_registry()
    available = list_assemblers()
    missing = [t.value for t in Target if t not in available]
    if missing:
        logger.warning("No assembler for: %s", ", ".join(missing))

    return {
        "status": "degraded" if missing else "healthy",
        "version": get_server_version(),
        "checked_at": datetime.now(UTC).isoformat(),
        "capsules": [d.type_id for d in registry],
        "targets": [t.value for t in available],
        "missing_targets": missing,
        "config": {
            "default_target": get_environment(EnvVar.FORGE_DEFAULT_TARGET),
            "max_workers": get_max_workers(),
            "package_prefix": get_environment(EnvVar.FORGE_PACKAGE_PREFIX),
        },
    }


__all__ = ["get_status"]
