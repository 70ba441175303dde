from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ImageCodecPort(Protocol):
    """Protocol for decoding a source image and re-encoding it in another format."""

    def decode(self, source_path: Path) -> Any:
        """
        Open and fully decode an image.

        Args:
            source_path: Image file to read

        Returns:
            Opaque decoded image handle accepted by encode()

        Raises:
            DecodeError: If the file cannot be opened or decoded
        """
        ...

    def encode(self, image: Any, target_path: Path) -> None:
        """
        Write a decoded image; the format follows the target extension.

        Raises:
            EncodeError: If encoding or writing fails
        """
        ...
