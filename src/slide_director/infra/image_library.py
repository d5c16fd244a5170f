"""Asset store protocol and a filesystem image library."""

from pathlib import Path
from typing import List, Protocol

from slide_director.domain.image import ImageEntry

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp", "svg", "bmp"})


class AssetStore(Protocol):
    """Source of image assets the agent may embed in slides."""

    def list_images(self) -> List[ImageEntry]: ...


class ImageLibrary:
    """
    Lists image files stored under ``<storage_dir>/images``.

    Args:
        images_dir: Directory holding the image files.
    """

    def __init__(self, images_dir: Path) -> None:
        self.images_dir = images_dir

    def list_images(self) -> List[ImageEntry]:
        """
        Reads the directory on every call; nothing is cached.

        Returns:
            Image entries sorted by file name.
        """
        if not self.images_dir.exists():
            self.images_dir.mkdir(parents=True, exist_ok=True)
            return []

        entries: List[ImageEntry] = []
        for path in sorted(self.images_dir.iterdir(), key=lambda p: p.name):
            if not path.is_file():
                continue
            if path.suffix.lower().lstrip(".") not in IMAGE_EXTENSIONS:
                continue
            entries.append(
                ImageEntry(name=path.name, reference_url=path.resolve().as_uri())
            )
        return entries
