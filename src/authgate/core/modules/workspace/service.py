import asyncio
from pathlib import Path
from uuid import UUID

import structlog

from authgate.core.core import Service

logger = structlog.get_logger(__name__)

SHARED_UPLOAD_DIRS = ("csv", "pdf", "excel")


class WorkspaceService(Service):
    """Provisions the upload directories a signed-in user needs."""

    def directories_for(self, user_id: UUID) -> list[Path]:
        root = Path(self.core.config.uploads_path)
        return [*(root / name for name in SHARED_UPLOAD_DIRS), root / "profile" / str(user_id)]

    def provision(self, user_id: UUID) -> None:
        """Queue creation of the user's directories."""
        self.core.services.task.submit("workspace_provision", self.create_directories(user_id))

    async def create_directories(self, user_id: UUID) -> None:
        paths = self.directories_for(user_id)
        await asyncio.to_thread(_make_dirs, paths)
        logger.debug("workspace_provisioned", user_id=user_id, paths=[str(p) for p in paths])


def _make_dirs(paths: list[Path]) -> None:
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)
