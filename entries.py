"""
Entry and content block records, and conversion from the CMS record shape.

The CMS query projects each log entry as:

    _id, date, title, tags, pinned, publishToEmail, emailSentAt,
    blocks[] { _type, _key, text, url, size, imageUrl, audioUrl },
    content, imageUrl, audioUrl, embedUrl      (legacy, pre-blocks)
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

TEXT = "text"
EMBED = "embed"
IMAGE = "image"
AUDIO = "audio"

IMAGE_SIZES = ("small", "medium", "large", "full")


@dataclass(frozen=True)
class TextBlock:
    body: str = ""
    kind: str = field(default=TEXT, init=False)


@dataclass(frozen=True)
class EmbedBlock:
    target: str = ""
    kind: str = field(default=EMBED, init=False)


@dataclass(frozen=True)
class ImageBlock:
    asset_url: str = ""
    size: Optional[str] = "full"
    kind: str = field(default=IMAGE, init=False)


@dataclass(frozen=True)
class AudioBlock:
    asset_url: str = ""
    kind: str = field(default=AUDIO, init=False)


ContentBlock = Union[TextBlock, EmbedBlock, ImageBlock, AudioBlock]


@dataclass(frozen=True)
class Entry:
    """One log entry as the renderer sees it. Read-only."""
    id: str
    title: str
    date: Optional[date] = None
    tags: List[str] = field(default_factory=list)
    blocks: List[ContentBlock] = field(default_factory=list)
    # True when the record carried any blocks, even ones that were dropped
    has_blocks: bool = False
    pinned: bool = False
    publish_to_email: bool = False
    email_sent_at: Optional[str] = None
    # Legacy flat fields, used only when the record had no blocks
    image_url: Optional[str] = None
    audio_url: Optional[str] = None
    embed_url: Optional[str] = None
    content: Optional[str] = None


# ---------------------------------------------------------------------------
# CMS RECORD CONVERSION
# ---------------------------------------------------------------------------

def _string_field(record: dict, name: str, default=""):
    # Non-string CMS values are treated as missing
    value = record.get(name)
    return value if isinstance(value, str) and value else default


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _block_from_record(record: dict) -> Optional[ContentBlock]:
    block_type = record.get("_type")
    if block_type == "textBlock":
        return TextBlock(body=_string_field(record, "text"))
    if block_type == "embedBlock":
        return EmbedBlock(target=_string_field(record, "url"))
    if block_type == "imageBlock":
        return ImageBlock(asset_url=_string_field(record, "imageUrl"), size=_string_field(record, "size", None))
    if block_type == "audioBlock":
        return AudioBlock(asset_url=_string_field(record, "audioUrl"))
    logger.debug("Dropping block %s with unknown type %r", record.get("_key"), block_type)
    return None


def parse_entry_date(value) -> Optional[date]:
    """Accept YYYY-MM-DD or a full ISO timestamp; anything else is no date."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.debug("Ignoring unparseable entry date %r", value)
        return None


def entry_from_record(record) -> Entry:
    """Build an Entry from one CMS record, rejecting records without id or title."""
    if not isinstance(record, dict):
        raise ValueError("Entry record must be a JSON object")

    entry_id = str(record.get("_id") or "").strip()
    if not entry_id:
        raise ValueError("Entry record is missing _id")

    title = str(record.get("title") or "").strip()
    if not title:
        raise ValueError(f"Entry {entry_id} has no title")

    block_records = record.get("blocks")
    if not isinstance(block_records, list):
        block_records = []

    blocks = []
    for block_record in block_records:
        if not isinstance(block_record, dict):
            continue
        block = _block_from_record(block_record)
        if block is not None:
            blocks.append(block)

    return Entry(
        id=entry_id,
        title=title,
        date=parse_entry_date(record.get("date")),
        tags=_string_list(record.get("tags")),
        blocks=blocks,
        has_blocks=bool(block_records),
        pinned=bool(record.get("pinned")),
        publish_to_email=bool(record.get("publishToEmail")),
        email_sent_at=str(record["emailSentAt"]) if record.get("emailSentAt") else None,
        image_url=_string_field(record, "imageUrl", None),
        audio_url=_string_field(record, "audioUrl", None),
        embed_url=_string_field(record, "embedUrl", None),
        content=_string_field(record, "content", None),
    )


def load_entries(path: str) -> List[Entry]:
    """Read a JSON export holding one entry record or a list of them."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = data if isinstance(data, list) else [data]
    return [entry_from_record(record) for record in records]
