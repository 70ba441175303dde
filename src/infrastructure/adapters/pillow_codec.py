"""Pillow-based image codec adapter."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ...domain.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)


class PillowImageCodec:
    """Decode any format Pillow can read, encode by target file extension."""

    def decode(self, source_path: Path) -> Image.Image:
        """
        Open and fully load an image into memory.

        Animated sources contribute their first frame.

        Raises:
            DecodeError: If the file cannot be opened, identified or decoded
        """
        try:
            with Image.open(source_path) as img:
                img.load()
                return img.copy()
        except UnidentifiedImageError as e:
            raise DecodeError(source_path, "unrecognised image data") from e
        except FileNotFoundError as e:
            raise DecodeError(source_path, "file not found") from e
        except (OSError, ValueError, SyntaxError) as e:
            # Truncated or corrupt data surfaces as OSError/SyntaxError during load()
            raise DecodeError(source_path, str(e) or type(e).__name__) from e

    def encode(self, image: Image.Image, target_path: Path) -> None:
        """
        Save image in the format implied by target_path's extension.

        Raises:
            EncodeError: If the format is unknown or writing fails
        """
        target_path = Path(target_path)
        image_format = Image.registered_extensions().get(target_path.suffix.lower())
        if image_format is None:
            raise EncodeError(target_path, f"no encoder for extension '{target_path.suffix}'")

        try:
            image.save(target_path, format=image_format)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(target_path, str(e) or type(e).__name__) from e
        logger.debug(f"Wrote {target_path.name} as {image_format}", extra={"size": image.size, "mode": image.mode})
