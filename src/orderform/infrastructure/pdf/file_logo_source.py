"""Logo loaded from an image file on disk."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from orderform.domain.exceptions import AssetLoadFailed
from orderform.domain.model.invoice import LogoImage
from orderform.domain.repository.invoice_output import LogoSource


class FileLogoSource(LogoSource):

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> LogoImage:
        if not self._path.is_file():
            raise AssetLoadFailed(f"Logo not found at {self._path}")
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            raise AssetLoadFailed(f"Cannot read logo {self._path}: {exc}") from exc
        if not data:
            raise AssetLoadFailed(f"Logo file {self._path} is empty")

        mime_type, _ = mimetypes.guess_type(str(self._path))
        if not mime_type or not mime_type.startswith("image/"):
            mime_type = "image/png"
        return LogoImage(mime_type=mime_type, data=data)
