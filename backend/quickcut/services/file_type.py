"""Pick a preview widget for a delivered file."""
from typing import Optional
from urllib.parse import urlsplit

import httpx

from quickcut.constants import FileType
from quickcut.utils.logger import logger

EXTENSION_TYPES = {
    **{ext: FileType.VIDEO for ext in ("mp4", "webm", "mov", "avi", "mkv", "flv")},
    **{ext: FileType.IMAGE for ext in ("jpg", "jpeg", "png", "gif", "webp", "svg", "bmp")},
    "pdf": FileType.PDF,
}


def type_from_extension(path: Optional[str]) -> Optional[str]:
    """Return the file type implied by a name or path extension, if known."""
    if not path or "." not in path:
        return None
    return EXTENSION_TYPES.get(path.rsplit(".", 1)[-1].lower())


def type_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    content_type = content_type.split(";", 1)[0].strip().lower()
    if content_type.startswith("video/"):
        return FileType.VIDEO
    if content_type.startswith("image/"):
        return FileType.IMAGE
    if content_type == "application/pdf":
        return FileType.PDF
    return None


async def detect_file_type(
    url: str,
    file_name: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Detect how a delivered file should be previewed.

    Checks the file name extension, then the URL path extension, then the
    Content-Type of a HEAD request.

    Returns:
        One of FileType.VIDEO, IMAGE, PDF or OTHER
    """
    detected = type_from_extension(file_name) or type_from_extension(urlsplit(url).path)
    if detected:
        return detected

    try:
        async with httpx.AsyncClient(timeout=5.0, follow_redirects=True, transport=transport) as client:
            response = await client.head(url)
        detected = type_from_content_type(response.headers.get("content-type"))
    except httpx.HTTPError as e:
        logger.info(f"Could not detect file type from headers for {url}: {e}")

    return detected or FileType.OTHER
