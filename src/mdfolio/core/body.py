"""Line-oriented body grammar: markdown body -> ordered content blocks

Only a handful of constructs are structural:

    ---                  divider (three or more hyphens alone on a line)
    ## Title             title for the text block that follows (h2 only)
    ![alt](src)          image, when it is the whole line
    [video](url)         video embed, when it is the whole line
    > caption            caption for the image/video directly above

Everything else is accumulated verbatim into text blocks and left to the
downstream markdown renderer.
"""

import re
from typing import Optional

from mdfolio.core.models import DividerBlock, ImageBlock, TextBlock, VideoBlock


DIVIDER_RE = re.compile(r'^-{3,}$')
HEADING_RE = re.compile(r'^##\s+(.+)$')
IMAGE_RE   = re.compile(r'^!\[([^\]]*)\]\(([^)]+)\)$')
VIDEO_RE   = re.compile(r'^\[video\]\(([^)]+)\)$', re.IGNORECASE)
CAPTION_RE = re.compile(r'^>\s*(.+)$')


class _TextAccumulator:
    """Pending text section: an optional title and the raw lines under it."""

    def __init__(self) -> None:
        self.title: Optional[str] = None
        self.lines: list[str] = []

    @property
    def is_open(self) -> bool:
        return bool(self.lines) or self.title is not None

    def flush(self, blocks: list) -> None:
        """Emit the pending text as a block (if non-empty) and reset; a bare title is dropped."""
        text = '\n'.join(self.lines).strip()
        if text:
            blocks.append(TextBlock(title=self.title or None, body=text))
        self.title = None
        self.lines = []


def _caption(lines: list[str], i: int) -> Optional[str]:
    """Return the caption on line i if it is a `> caption` line, else None."""
    if i < len(lines):
        m = CAPTION_RE.match(lines[i].strip())
        if m:
            return m.group(1)
    return None


def parse_body(body: str) -> list:
    """Parse a markdown body into text, divider, image and video blocks in document order."""
    blocks: list = []
    pending = _TextAccumulator()
    lines = body.split('\n')

    i = 0
    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()
        i += 1

        if not trimmed and not pending.is_open:
            continue

        if DIVIDER_RE.match(trimmed):
            pending.flush(blocks)
            blocks.append(DividerBlock())
            continue

        m = HEADING_RE.match(trimmed)
        if m:
            pending.flush(blocks)
            pending.title = m.group(1)
            continue

        m = IMAGE_RE.match(trimmed)
        if m:
            pending.flush(blocks)
            caption = _caption(lines, i)
            if caption is not None:
                i += 1
            blocks.append(ImageBlock(src=m.group(2), alt=m.group(1) or None, caption=caption))
            continue

        m = VIDEO_RE.match(trimmed)
        if m:
            pending.flush(blocks)
            caption = _caption(lines, i)
            if caption is not None:
                i += 1
            blocks.append(VideoBlock(embed_url=m.group(1), caption=caption))
            continue

        pending.lines.append(line)

    pending.flush(blocks)
    return blocks
