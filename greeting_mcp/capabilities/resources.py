from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from ..core.registry import CapabilityRegistry, Handler
from ..schema import InvocationResult, ValidatedArguments
from ..shard import constants as C
from ..shard.instructions import RESOURCE_DESCRIPTIONS


def _iso_millis(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def fake_server_info(now: datetime) -> dict[str, Any]:
    """Synthetic status record; only the timestamps depend on ``now``."""
    return {
        "id": "srv-demo-001",
        "name": "Demo Application Server",
        "region": "ap-northeast-2",
        "status": "healthy",
        "uptimeSeconds": 86_400,
        "activeConnections": 128,
        "cpuUsage": 37,
        "memoryUsage": 58,
        "lastDeployment": _iso_millis(now - timedelta(hours=1)),
        "reportedAt": _iso_millis(now),
    }


def make_fake_server_info(clock: Callable[[], datetime] | None = None) -> Handler:
    def read_fake_server_info(args: ValidatedArguments) -> InvocationResult:
        now = clock() if clock else datetime.now(tz=UTC)
        return InvocationResult.text(json.dumps(fake_server_info(now), indent=2))

    return read_fake_server_info


def register_resources(registry: CapabilityRegistry, *, clock: Callable[[], datetime] | None = None) -> None:
    registry.resource(
        C.FAKE_SERVER_INFO_URI,
        description=RESOURCE_DESCRIPTIONS[C.FAKE_SERVER_INFO_NAME],
        title=C.FAKE_SERVER_INFO_NAME,
        mime_type=C.JSON_MIME,
    )(make_fake_server_info(clock))


__all__ = ["fake_server_info", "make_fake_server_info", "register_resources"]
