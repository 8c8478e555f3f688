"""Content tree models: typed blocks, page and folder nodes"""

import math
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    """Base for serialized models: camelCase aliases accepted by name or alias."""
    model_config = ConfigDict(populate_by_name=True)


# --- blocks ---

class StatsItem(_Model):
    """One entry of a stats strip; href turns the label into a link. Extra keys pass through."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')
    label: str
    href: Optional[str] = None


class IframeBlock(_Model):
    type: Literal['iframe'] = 'iframe'
    url: str
    caption: Optional[str] = None


class StatsBlock(_Model):
    type: Literal['stats'] = 'stats'
    items: list[StatsItem]


class TextBlock(_Model):
    """A written section: optional title plus a raw markdown body."""
    type: Literal['text'] = 'text'
    title: Optional[str] = None
    body: str
    html: Optional[str] = None      # rendered body; only set when render_html is enabled


class ImageBlock(_Model):
    type: Literal['image'] = 'image'
    src: str
    alt: Optional[str] = None
    caption: Optional[str] = None


class VideoBlock(_Model):
    type: Literal['video'] = 'video'
    embed_url: str = Field(alias='embedUrl')
    caption: Optional[str] = None


class DividerBlock(_Model):
    type: Literal['divider'] = 'divider'


class CustomBlock(_Model):
    """Escape hatch mapped to a UI component; only hand-authored, never parsed from markdown."""
    type: Literal['custom'] = 'custom'
    component_id: str = Field(alias='componentId')
    props: Optional[dict[str, Any]] = None


Block = Annotated[
    Union[IframeBlock, StatsBlock, TextBlock, ImageBlock, VideoBlock, DividerBlock, CustomBlock],
    Field(discriminator='type'),
]


# --- nodes ---

class PageNode(_Model):
    """A content page. Always a leaf; blocks are kept in authored order."""
    id: str
    type: Literal['page'] = 'page'
    name: str
    year: Optional[int] = None
    featured: Optional[bool] = None
    blocks: list[Block] = []


class FolderNode(_Model):
    """Pure grouping node with at least one child."""
    id: str
    type: Literal['folder'] = 'folder'
    name: str
    children: list['ContentNode']


ContentNode = Annotated[Union[FolderNode, PageNode], Field(discriminator='type')]

FolderNode.model_rebuild()


class ParsedPage(BaseModel):
    """Parser result: the page plus its sibling ordering key (inf when unordered)."""
    page: PageNode
    order: float = math.inf


def dump_nodes(nodes: list) -> list[dict[str, Any]]:
    """Serialize nodes with camelCase keys and no null-valued optional fields."""
    return [n.model_dump(by_alias=True, exclude_none=True) for n in nodes]
