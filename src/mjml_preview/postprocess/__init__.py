"""Post-processing of compiled HTML: image inlining and beautification."""

from ._beautify import (
    STYLE_MARKER,
    beautify_html,
    format_html,
    rename_custom_styles,
    restore_custom_styles,
)
from ._images import EMBEDDABLE_EXTENSIONS, encode_image, fix_images, image_mime_type

__all__ = [
    "EMBEDDABLE_EXTENSIONS",
    "STYLE_MARKER",
    "beautify_html",
    "encode_image",
    "fix_images",
    "format_html",
    "image_mime_type",
    "rename_custom_styles",
    "restore_custom_styles",
]
