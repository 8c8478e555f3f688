"""Content file parsing: frontmatter metadata + body blocks -> PageNode"""

import math
from pathlib import Path

from mdfolio.core.body import parse_body
from mdfolio.core.frontmatter import load_frontmatter, split_frontmatter
from mdfolio.core.models import IframeBlock, PageNode, ParsedPage, StatsBlock
from mdfolio.core.utils.titles import title_case


def parse_content(raw: str, fallback_id: str, source: str = '<string>') -> ParsedPage:
    """Parse one content file's text into a page and its sibling ordering key.

    Frontmatter-derived blocks come first (iframe, then stats), followed by
    body blocks in document order. Fields absent from the frontmatter stay
    unset on the page so they are omitted from serialized output.
    """
    data, body = split_frontmatter(raw, source)
    fm = load_frontmatter(data, source)

    blocks = []
    if fm.iframe:
        blocks.append(IframeBlock(url=fm.iframe))
    if fm.stats:
        blocks.append(StatsBlock(items=fm.stats))
    blocks.extend(parse_body(body))

    page = PageNode(
        id=fm.id if fm.id is not None else fallback_id,
        name=fm.name if fm.name is not None else title_case(fallback_id),
        year=fm.year,
        featured=fm.featured,
        blocks=blocks,
    )
    return ParsedPage(page=page, order=fm.order if fm.order is not None else math.inf)


def parse_file(path: Path) -> ParsedPage:
    """Read and parse a content file, using its stem as the fallback id."""
    raw = path.read_text(encoding='utf-8', errors='replace')
    return parse_content(raw, path.stem, source=str(path))
