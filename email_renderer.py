"""
cabbages.info — Email Renderer
Turns a log entry into one self-contained, email-safe HTML document.

The output goes out both as a transactional email body and as the
<content:encoded> CDATA of the RSS feed, so it uses inline CSS only:
no iframes, no CSS variables, no external stylesheets apart from the
web font. Embeds render as clickable thumbnails or links.
"""

import html as html_lib
import re
from urllib.parse import urlsplit

import markdown

import site_config
from entries import AUDIO, EMBED, IMAGE, TEXT, Entry

FONT_STACK = "'IBM Plex Mono', 'Courier New', monospace"

GLOW_HUES = [10, 35, 200]  # rust, gold, blue

IMAGE_MAX_WIDTHS = {
    "small": "200px",
    "medium": "400px",
    "large": "600px",
    "full": "100%",
}

EMBED_SRC_RE = re.compile(r"""src=["']([^"']+)["']""")
YOUTUBE_ID_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\s?]+)")
MEDIA_LINE_RE = re.compile(
    r"^(https?://(?:www\.)?(?:youtube\.com/watch\S+|youtu\.be/\S+|soundcloud\.com/\S+"
    r"|[A-Za-z0-9_-]+\.bandcamp\.com/\S+))$",
    re.MULTILINE,
)

# nl2br: line break on newline; magiclink: bare URLs in running text become links
MD_EXTENSIONS = ["nl2br", "pymdownx.magiclink"]

CTA_LINK_STYLE = (
    "display: inline-block; padding: 12px 20px; "
    "border: 1px solid #000000; text-decoration: none; color: #000000; "
    f"font-family: {FONT_STACK}; font-size: 13px;"
)


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------

def escape_html(value) -> str:
    """Escape &, <, > and double quotes for text and attribute values."""
    if not value:
        return ""
    return html_lib.escape(str(value), quote=False).replace('"', "&quot;")


def glow_color_for_entry(entry_id: str) -> str:
    """Deterministic accent color for an entry, one of three fixed hues."""
    h = 0
    encoded = (entry_id or "").encode("utf-16-le", "surrogatepass")
    # Hash over UTF-16 code units so ids outside the BMP match the site's colors
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    hue = GLOW_HUES[abs(h) % len(GLOW_HUES)]
    return f"hsla({hue}, 70%, 45%, 0.6)"


def clean_embed_input(raw) -> str:
    """Reduce pasted embed code to its src URL; plain URLs pass through trimmed."""
    if not raw:
        return ""
    trimmed = raw.strip()
    if "<" in trimmed:
        match = EMBED_SRC_RE.search(trimmed)
        return match.group(1) if match else trimmed
    return trimmed


def extract_youtube_id(url: str):
    match = YOUTUBE_ID_RE.search(url)
    return match.group(1) if match else None


def format_bandcamp_label(url: str) -> str:
    """'artist — track name' from a Bandcamp URL."""
    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
    except ValueError:
        parsed, hostname = None, None
    # Scheme-less input is not an absolute URL
    if parsed is None or not parsed.scheme or not hostname:
        return re.sub(r"https?://", "", url, count=1)

    artist = hostname.replace(".bandcamp.com", "", 1)
    path_parts = [part for part in parsed.path.split("/") if part]
    if len(path_parts) > 1:
        name = path_parts[1].replace("-", " ")
        return f"{artist} — {name}"
    return artist


# ---------------------------------------------------------------------------
# BLOCK RENDERERS
# ---------------------------------------------------------------------------

def _media_line_to_markdown(match) -> str:
    url = match.group(1)
    if "youtube.com" in url or "youtu.be" in url:
        video_id = extract_youtube_id(url)
        if video_id:
            return f"[![YouTube](https://img.youtube.com/vi/{video_id}/hqdefault.jpg)]({url})"
    return f"[{url}]({url})"


def render_text_block(text) -> str:
    if not text:
        return ""
    # Bare media URLs become links; email clients can't show players
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    with_links = MEDIA_LINE_RE.sub(_media_line_to_markdown, text)
    body = markdown.markdown(with_links, extensions=MD_EXTENSIONS)
    return f'<div style="line-height: 1.6; margin-bottom: 16px;">{body}</div>'


def render_embed_block(raw, glow_color: str) -> str:
    clean_url = clean_embed_input(raw)
    if not clean_url:
        return ""
    href = escape_html(clean_url)

    if "youtube.com" in clean_url or "youtu.be" in clean_url:
        video_id = extract_youtube_id(clean_url)
        if video_id:
            watch_url = escape_html(f"https://www.youtube.com/watch?v={video_id}")
            thumb_url = escape_html(f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg")
            return f"""
        <div style="text-align: center; margin: 16px 0;">
          <a href="{watch_url}" style="display: inline-block; text-decoration: none; box-shadow: 0 0 20px 4px {glow_color};">
            <img src="{thumb_url}" alt="YouTube video" style="display: block; max-width: 480px; width: 100%; height: auto;" />
          </a>
          <div style="margin-top: 8px;">
            <a href="{watch_url}" style="color: #000000; font-size: 13px; font-family: {FONT_STACK};">&#9654; Watch on YouTube</a>
          </div>
        </div>"""

    if "soundcloud.com" in clean_url:
        return f"""
      <div style="text-align: center; margin: 16px 0;">
        <a href="{href}" style="{CTA_LINK_STYLE} box-shadow: 0 0 20px 4px {glow_color};">&#9654; Listen on SoundCloud</a>
      </div>"""

    if "bandcamp.com" in clean_url:
        label = escape_html(format_bandcamp_label(clean_url))
        return f"""
      <div style="text-align: center; margin: 16px 0;">
        <a href="{href}" style="{CTA_LINK_STYLE} box-shadow: 0 0 20px 4px {glow_color};">&#9654; {label}</a>
      </div>"""

    return f"""
    <div style="text-align: center; margin: 16px 0;">
      <a href="{href}" style="color: #000000; font-size: 13px; font-family: {FONT_STACK}; text-decoration: underline;">
        {href}
      </a>
    </div>"""


def render_image_block(image_url, size="full") -> str:
    if not image_url:
        return ""
    max_width = IMAGE_MAX_WIDTHS.get(size, "100%")
    return f"""
    <div style="text-align: center; margin: 16px 0;">
      <img src="{escape_html(image_url)}" alt="" style="max-width: {max_width}; height: auto; display: block; margin: 0 auto;" />
    </div>"""


def render_audio_block(audio_url) -> str:
    if not audio_url:
        return ""
    return f"""
    <div style="text-align: center; margin: 16px 0;">
      <a href="{escape_html(audio_url)}" style="{CTA_LINK_STYLE}">&#9654; Listen / Download Audio</a>
    </div>"""


# One row per block kind; a new kind needs a record type in entries.py and a row here
BLOCK_RENDERERS = {
    TEXT: lambda block, glow_color: render_text_block(block.body),
    EMBED: lambda block, glow_color: render_embed_block(block.target, glow_color),
    IMAGE: lambda block, glow_color: render_image_block(block.asset_url, block.size),
    AUDIO: lambda block, glow_color: render_audio_block(block.asset_url),
}


def render_blocks(entry: Entry, glow_color: str) -> str:
    """Render the entry body: blocks in order, or the legacy fields if there are none."""
    if entry.blocks or entry.has_blocks:
        parts = [BLOCK_RENDERERS[block.kind](block, glow_color) for block in entry.blocks]
        return "\n".join(part for part in parts if part)

    # Legacy fields (pre-blocks entries), fixed order
    parts = [
        render_image_block(entry.image_url, "full"),
        render_embed_block(entry.embed_url, glow_color),
        render_text_block(entry.content),
        render_audio_block(entry.audio_url),
    ]
    return "\n".join(part for part in parts if part)


# ---------------------------------------------------------------------------
# DOCUMENT
# ---------------------------------------------------------------------------

def format_entry_date(entry: Entry) -> str:
    """M.D.YY, the way the site shows dates. Pinned or undated entries get none."""
    if entry.pinned or entry.date is None:
        return ""
    d = entry.date
    return f"{d.month}.{d.day}.{d.year % 100:02d}"


def build_tags_html(tags) -> str:
    if not tags:
        return ""
    chips = "".join(
        f'<span style="display: inline-block; padding: 2px 6px; border: 1px solid #000000; '
        f'font-size: 12px; margin-right: 6px; font-family: {FONT_STACK};">{escape_html(tag)}</span>'
        for tag in tags
    )
    return f'<div style="margin-top: 8px;">{chips}</div>'


def generate_email_html(entry: Entry, site_url: str = None, site_name: str = None) -> str:
    """Render one entry as a complete email-safe HTML document."""
    site_url = (site_url or site_config.SITE_URL).rstrip("/")
    site_name = site_name or site_config.SITE_NAME

    glow_color = glow_color_for_entry(entry.id)
    blocks_html = render_blocks(entry, glow_color)

    formatted_date = format_entry_date(entry)
    date_html = (
        f'<div style="font-size: 12px; opacity: 0.6; margin-bottom: 4px;">{formatted_date}</div>'
        if formatted_date else ""
    )
    release_style = " background: #FFEB3B; display: inline-block; padding: 0 4px;" if "release" in entry.tags else ""
    permalink = escape_html(f"{site_url}/#{entry.id}")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link href="https://fonts.googleapis.com/css2?family=IBM+Plex+Mono:wght@400;700&amp;display=swap" rel="stylesheet">
</head>
<body style="margin: 0; padding: 0; background: #ffffff; color: #000000; font-family: {FONT_STACK}; font-size: 14px; line-height: 1.5;">
  <div style="max-width: 640px; margin: 0 auto; padding: 32px 16px;">

    <!-- Header -->
    <div style="margin-bottom: 24px; border-bottom: 1px solid #000000; padding-bottom: 16px;">
      {date_html}
      <div style="font-size: 15px; font-weight: 400;{release_style}">{escape_html(entry.title)}</div>
      {build_tags_html(entry.tags)}
    </div>

    <!-- Content -->
    {blocks_html}

    <!-- Footer -->
    <div style="margin-top: 32px; padding-top: 16px; border-top: 1px solid #000000; font-size: 12px;">
      <a href="{permalink}" style="color: #000000;">View on {escape_html(site_name)}</a>
    </div>

  </div>
</body>
</html>"""
