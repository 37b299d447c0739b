"""Image Resolver Module

Turns image references into intrinsic pixel dimensions plus a source the
rendering backend can draw. Supported references:

- Filesystem path (str or Path), relative paths resolved against ``base_dir``
- Raw image bytes
- ``data:image/...;base64,`` URIs
- ``http(s)://`` URLs

Each generation run owns one resolver; its cache never outlives the run.
"""
import base64
import binascii
import hashlib
import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
from PIL import Image as PILImage

from ..exceptions import AssetDecodeError, MissingOptionalAssetError

log = logging.getLogger(__name__)

ImageRef = Union[str, Path, bytes]


@dataclass(frozen=True)
class ResolvedImage:
    """Decoded image metadata.

    Attributes:
        source: File path (str) or raw bytes, ready for the backend
        width: Intrinsic width in pixels
        height: Intrinsic height in pixels
    """
    source: Any
    width: int
    height: int


class ImageResolver:
    """Resolves and memoises image references for one report run."""

    def __init__(self, base_dir: Optional[str] = None, timeout: int = 30):
        """
        Args:
            base_dir: Directory relative file references are resolved against
            timeout: HTTP timeout in seconds for URL references
        """
        self.base_dir = base_dir
        self.timeout = timeout
        self._cache: Dict[str, ResolvedImage] = {}

    def resolve(self, ref: Optional[ImageRef]) -> ResolvedImage:
        """
        Resolve an image reference into its dimensions.

        Raises:
            MissingOptionalAssetError: If no reference was supplied
            AssetDecodeError: If the reference cannot be loaded or decoded
        """
        if ref is None or (isinstance(ref, (str, bytes)) and not ref):
            raise MissingOptionalAssetError("No image supplied")

        key = self._cache_key(ref)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        source = self._load(ref)
        label = self._label(ref)
        # Decode the pixel data too; truncated files pass a header-only open
        try:
            if isinstance(source, bytes):
                with PILImage.open(io.BytesIO(source)) as img:
                    img.load()
                    width, height = img.size
            else:
                with PILImage.open(source) as img:
                    img.load()
                    width, height = img.size
        except (OSError, SyntaxError, ValueError, PILImage.DecompressionBombError) as e:
            raise AssetDecodeError(label, str(e)) from e

        if width <= 0 or height <= 0:
            raise AssetDecodeError(label, f"invalid size {width}x{height}")

        resolved = ResolvedImage(source=source, width=width, height=height)
        self._cache[key] = resolved
        log.debug("Resolved image %s (%dx%d)", label, width, height)
        return resolved

    def clear(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------

    def _load(self, ref: ImageRef) -> Any:
        if isinstance(ref, bytes):
            return ref

        text = str(ref)
        if text.startswith("data:image"):
            try:
                _, data = text.split(",", 1)
                return base64.b64decode(data, validate=True)
            except (ValueError, binascii.Error) as e:
                raise AssetDecodeError(self._label(ref), f"bad data URI: {e}") from e

        if text.startswith(("http://", "https://")):
            try:
                response = requests.get(text, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                raise AssetDecodeError(text, str(e)) from e
            return response.content

        path = self._resolve_path(text)
        if not os.path.isfile(path):
            raise AssetDecodeError(text, "file not found")
        return path

    def _resolve_path(self, text: str) -> str:
        if self.base_dir and not os.path.isabs(text):
            return os.path.join(self.base_dir, text)
        return text

    def _cache_key(self, ref: ImageRef) -> str:
        if isinstance(ref, bytes):
            return "bytes:" + hashlib.sha1(ref).hexdigest()
        text = str(ref)
        if text.startswith("data:image"):
            return "data:" + hashlib.sha1(text.encode("utf-8")).hexdigest()
        if text.startswith(("http://", "https://")):
            return text
        return "file:" + os.path.abspath(self._resolve_path(text))

    @staticmethod
    def _label(ref: ImageRef) -> str:
        if isinstance(ref, bytes):
            return f"<{len(ref)} bytes>"
        text = str(ref)
        if text.startswith("data:image"):
            return text[:30] + "..."
        return text
