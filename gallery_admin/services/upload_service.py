"""Reading and checking local files before they are uploaded."""
import io
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image as PILImage, UnidentifiedImageError

from gallery_admin.core.config import settings
from gallery_admin.core.exceptions import UploadException
from gallery_admin.models.upload import UploadFile

logger = logging.getLogger(__name__)


def detect_image_type(filename: str, content: bytes) -> str:
    """
    Check that ``content`` is an image and return its MIME type.

    Raises:
        UploadException: If Pillow cannot identify the data as an image
    """
    try:
        with PILImage.open(io.BytesIO(content)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise UploadException(filename, "not a supported image") from e

    return PILImage.MIME.get(image_format or "", "application/octet-stream")


def prepare_upload(path: Path, max_size_bytes: Optional[int] = None) -> UploadFile:
    """
    Load a local image for upload.

    Args:
        path: File to read
        max_size_bytes: Size limit (defaults to the configured one)

    Returns:
        UploadFile with the detected content type

    Raises:
        UploadException: If the file is missing, too large or not an image
    """
    limit = max_size_bytes or settings.upload_max_size_bytes
    path = Path(path)

    if not path.is_file():
        raise UploadException(path.name, "file not found")

    size = path.stat().st_size
    if size > limit:
        raise UploadException(path.name, f"{size / 1024 / 1024:.1f} MB exceeds {limit / 1024 / 1024:.0f} MB")

    content = path.read_bytes()
    content_type = detect_image_type(path.name, content)
    return UploadFile(filename=path.name, content=content, content_type=content_type)


def prepare_uploads(paths: Iterable[Path]) -> List[UploadFile]:
    """Load several files, skipping (and logging) the ones that are rejected."""
    files: List[UploadFile] = []
    for path in paths:
        try:
            files.append(prepare_upload(path))
        except UploadException as e:
            logger.warning(e.message)
    return files
