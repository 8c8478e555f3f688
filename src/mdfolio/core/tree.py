"""Tree queries, duplicate-id policy, and merging beneath hand-authored root entries"""

import logging
from collections import Counter
from pathlib import Path
from typing import Iterator, Optional

import yaml
from pydantic import TypeAdapter, ValidationError

from mdfolio.core.models import ContentNode, FolderNode, PageNode


logger = logging.getLogger(__name__)

_NODES = TypeAdapter(list[ContentNode])


class DuplicateIdError(ValueError):
    """Raised when the duplicate-id policy is 'error' and ids collide."""

    def __init__(self, ids: list[str]):
        self.ids = ids
        super().__init__(f"Duplicate node ids: {', '.join(ids)}")


def iter_nodes(nodes: list) -> Iterator:
    """Yield every node depth-first in tree order."""
    for node in nodes:
        yield node
        if isinstance(node, FolderNode):
            yield from iter_nodes(node.children)


def find_page(nodes: list, page_id: str) -> Optional[PageNode]:
    """Return the first page with page_id in tree order, or None (folders never match)."""
    return next((n for n in iter_nodes(nodes) if isinstance(n, PageNode) and n.id == page_id), None)


def collect_folder_ids(nodes: list) -> list[str]:
    """Return the ids of all folders, outermost first."""
    return [n.id for n in iter_nodes(nodes) if isinstance(n, FolderNode)]


def find_ancestor_folder_ids(nodes: list, page_id: str, ancestors: tuple[str, ...] = ()) -> list[str]:
    """Return ids of the folders enclosing page_id, outermost first; [] at root or if absent."""
    for node in nodes:
        if isinstance(node, FolderNode):
            found = find_ancestor_folder_ids(node.children, page_id, (*ancestors, node.id))
            if found:
                return found
        elif node.id == page_id:
            return list(ancestors)
    return []


def find_duplicate_ids(nodes: list) -> list[str]:
    """Return ids used by more than one node anywhere in the tree, in first-seen order."""
    counts = Counter(n.id for n in iter_nodes(nodes))
    return [node_id for node_id, count in counts.items() if count > 1]


def check_duplicate_ids(nodes: list, policy: str = 'warn') -> list[str]:
    """Apply the duplicate-id policy: 'warn' logs and keeps all nodes, 'error' raises."""
    dupes = find_duplicate_ids(nodes)
    if dupes and policy == 'error':
        raise DuplicateIdError(dupes)
    for node_id in dupes:
        logger.warning("Duplicate node id %r; lookups resolve to the first occurrence", node_id)
    return dupes


def load_root_entries(path: Path) -> list:
    """Load hand-authored nodes (e.g. a home page) from a YAML list."""
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8')) or []
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid root entries file {path}: {e}") from e
    try:
        return _NODES.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"Invalid root entries file {path}: {e}") from e


def merge_tree(root_entries: list, content_tree: list) -> list:
    """Place hand-authored root entries ahead of the generated content tree."""
    return [*root_entries, *content_tree]
