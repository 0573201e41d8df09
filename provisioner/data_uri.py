import base64, binascii, logging, re
from typing import List, NamedTuple, Tuple
from urllib.parse import unquote_to_bytes

from .models import Attachment

DATA_URI_RE = re.compile(r"^data:([^;,]*)((?:;[^;,]*)*),(.*)$", re.IGNORECASE | re.DOTALL)
DEFAULT_MIME = "text/plain"

logger = logging.getLogger(__name__)

class DataUriError(Exception):
    pass

class AttachmentFile(NamedTuple):
    name: str
    content: str
    mime_type: str

def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    m = DATA_URI_RE.match(uri)
    if not m:
        raise DataUriError("Unsupported data URI")
    mime, params, payload = m.groups()
    if ";base64" in params.lower():
        try:
            data = base64.b64decode(payload)
        except (binascii.Error, ValueError) as e:
            raise DataUriError(f"Invalid base64 payload: {e}") from e
    else:
        data = unquote_to_bytes(payload)
    return mime or DEFAULT_MIME, data

def decode_attachments(attachments: List[Attachment]) -> List[AttachmentFile]:
    """Turn request attachments into text files for the generator.

    Only inline ``data:`` URIs carry content. Remote URLs, empty values and
    undecodable payloads degrade to an empty placeholder instead of failing.
    """
    out = []
    for a in attachments:
        if not a.url.lower().startswith("data:"):
            out.append(AttachmentFile(a.name, "", DEFAULT_MIME))
            continue
        try:
            mime, data = decode_data_uri(a.url)
        except DataUriError as e:
            logger.warning("attachment %s not decoded, using empty content: %s", a.name, e)
            out.append(AttachmentFile(a.name, "", DEFAULT_MIME))
            continue
        out.append(AttachmentFile(a.name, data.decode("utf-8", errors="replace"), mime))
    return out
