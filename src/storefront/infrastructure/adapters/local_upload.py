"""Upload adapter that keeps payment receipts on the local filesystem."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.collaborators import UploadedFile, UploadService
from storefront.domain.exceptions import UploadFailed, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp", "pdf"})
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class LocalUploadService(UploadService):

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def upload(self, file: UploadedFile) -> str:
        if file.extension not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                f"Receipt must be one of: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
                fields=["receipt"],
            )
        if not file.content:
            raise ValidationError("Receipt file is empty", fields=["receipt"])
        if len(file.content) > MAX_UPLOAD_BYTES:
            raise ValidationError("Receipt file is larger than 5 MB", fields=["receipt"])

        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        target = self._directory / f"{stamp}-{uuid.uuid4().hex[:8]}.{file.extension}"
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(file.content)
        except OSError as exc:
            logger.error("Could not store receipt %s: %s", file.filename, exc)
            raise UploadFailed(f"Could not store receipt '{file.filename}'; please retry") from exc

        logger.info("Stored receipt %s as %s", file.filename, target.name)
        return target.resolve().as_uri()
