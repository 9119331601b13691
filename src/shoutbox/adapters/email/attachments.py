"""Build attachments from files or binary streams.

Content is buffered in memory in full; the service caps attachments at
10 MB, so no streaming path exists.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path, PurePath
from typing import BinaryIO

from shoutbox.domain.errors import ConstructionError
from shoutbox.domain.models import DEFAULT_CONTENT_TYPE, Attachment

logger = logging.getLogger(__name__)


def guess_content_type(filename: str) -> str:
    """Return the MIME type registered for the file extension.

    Only the final extension is considered; compression suffixes such as
    ``.gz`` are not mapped to an inner type.

    Examples:
        >>> guess_content_type("report.pdf")
        'application/pdf'
        >>> guess_content_type("README")
        'application/octet-stream'
        >>> guess_content_type("data.unknownext")
        'application/octet-stream'
    """
    suffix = PurePath(filename).suffix.lower()
    if not suffix:
        return DEFAULT_CONTENT_TYPE
    content_type, _encoding = mimetypes.guess_type(f"attachment{suffix}", strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


def attachment_from_file(path: str | Path) -> Attachment:
    """Read a whole file into an :class:`Attachment`.

    Args:
        path: File to attach; its basename becomes the attachment filename.

    Raises:
        ConstructionError: When the file cannot be read.
    """
    file_path = Path(path)
    try:
        content = file_path.read_bytes()
    except OSError as exc:
        raise ConstructionError(f"error reading file: {exc}") from exc

    logger.debug("Attachment loaded", extra={"attachment": file_path.name, "size": len(content)})
    return Attachment(
        filename=file_path.name,
        content=content,
        content_type=guess_content_type(file_path.name),
    )


def attachment_from_reader(reader: BinaryIO, filename: str) -> Attachment:
    """Read a binary stream to exhaustion into an :class:`Attachment`.

    Args:
        reader: Any object with a ``read()`` returning bytes.
        filename: Name presented to the recipient; also drives type inference.

    Raises:
        ConstructionError: When reading the stream fails.

    Example:
        >>> import io
        >>> att = attachment_from_reader(io.BytesIO(b"%PDF-1.7"), "invoice.pdf")
        >>> (att.filename, att.content_type, att.content)
        ('invoice.pdf', 'application/pdf', b'%PDF-1.7')
    """
    try:
        content = reader.read()
    except OSError as exc:
        raise ConstructionError(f"error reading content: {exc}") from exc

    return Attachment(
        filename=filename,
        content=bytes(content),
        content_type=guess_content_type(filename),
    )


__all__ = [
    "attachment_from_file",
    "attachment_from_reader",
    "guess_content_type",
]
