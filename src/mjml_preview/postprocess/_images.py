"""Embed local images referenced from compiled HTML as data URIs."""

import base64
import mimetypes
import re
from pathlib import Path

from mjml_preview.utils import get_logger

EMBEDDABLE_EXTENSIONS = frozenset({"bmp", "gif", "jpeg", "jpg", "png", "svg"})

# group 1: attribute prefix and optional opening quote, group 2: reference,
# group 3: closing quote or parenthesis
_IMAGE_REF_RE = re.compile(
    r"""((?:src|url)(?:=|\()(?:['"]|))((?!http|\\|["']|\#).+?)(['"]|\))""",
    re.IGNORECASE | re.MULTILINE,
)

# built-in table only, so results do not depend on the host's mime.types
_MIME_TYPES = mimetypes.MimeTypes()


def image_mime_type(path: Path) -> str | None:
    """Return the MIME type of an embeddable image, or None.

    The type is derived from the file extension; it is embeddable when the
    type's canonical extension is one of `EMBEDDABLE_EXTENSIONS`.
    """
    mime_type, _ = _MIME_TYPES.guess_type(path.name)
    if mime_type is None:
        return None
    extension = _MIME_TYPES.guess_extension(mime_type)
    if extension is None or extension.lstrip(".").lower() not in EMBEDDABLE_EXTENSIONS:
        return None
    return mime_type


def encode_image(path: Path, original: str) -> str:
    """Return a ``data:`` URI for an image file, or `original` if it cannot be embedded."""
    mime_type = image_mime_type(path)
    if mime_type is None:
        return original
    if not path.is_file():
        return original

    data = path.read_bytes()
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def fix_images(html: str, document_path: Path | str) -> str:
    """Replace relative image references in HTML with embedded data URIs.

    Every ``src=`` attribute and CSS ``url(...)`` whose value is not remote
    (``http...``), escaped, quoted or an anchor is resolved against the
    directory of `document_path`. Existing bmp/gif/jpeg/png/svg files are
    embedded; everything else is left exactly as it was.

    Args:
        html: The HTML to rewrite.
        document_path: Path of the document the HTML was compiled from.

    Returns:
        The rewritten HTML.
    """
    base_dir = Path(document_path).parent
    logger = get_logger()

    def replace(match: re.Match[str]) -> str:
        start, src, end = match.group(1), match.group(2), match.group(3)
        # a leading slash still means the document directory
        encoded = encode_image(base_dir / src.lstrip("/"), src)
        if encoded is not src:
            logger.debug("image_inlined", src=src)
        return start + encoded + end

    return _IMAGE_REF_RE.sub(replace, html)
