"""Content root traversal: directories -> sorted folder/page tree"""

import logging
from pathlib import Path
from typing import Callable

from mdfolio.core.models import FolderNode, ParsedPage
from mdfolio.core.parse import parse_file
from mdfolio.core.utils.titles import title_case


logger = logging.getLogger(__name__)

HIDDEN_PREFIXES = ('_', '.')
DEFAULT_EXT = '.md'

FileParser = Callable[[Path], ParsedPage]


def is_hidden(name: str) -> bool:
    """Entries starting with '_' or '.' are excluded from traversal."""
    return name.startswith(HIDDEN_PREFIXES)


def _name_key(name: str) -> tuple[str, str]:
    """Case-insensitive name ordering; case-sensitive only to break exact ties."""
    return name.casefold(), name


def walk_directory(path: Path, ext: str = DEFAULT_EXT, parse: FileParser = parse_file) -> list:
    """Return the sorted content nodes under path: folders (by name) first, then pages.

    Pages sort by their ordering key, unordered pages last, ties by name.
    Folders whose subtree yields no pages are dropped.
    """
    folders: list[FolderNode] = []
    pages: list[ParsedPage] = []

    for entry in path.iterdir():
        if is_hidden(entry.name):
            continue
        if entry.is_dir():
            children = walk_directory(entry, ext, parse)
            if children:
                folders.append(FolderNode(id=entry.name, name=title_case(entry.name), children=children))
            else:
                logger.debug("Skipping empty folder %s", entry)
        elif entry.name.endswith(ext):
            try:
                pages.append(parse(entry))
            except OSError as e:
                logger.warning("Skipping unreadable content file %s: %s", entry, e)

    pages.sort(key=lambda p: (p.order, *_name_key(p.page.name)))
    folders.sort(key=lambda f: _name_key(f.name))
    return [*folders, *(p.page for p in pages)]


def build_tree(root: Path, ext: str = DEFAULT_EXT, parse: FileParser = parse_file) -> list:
    """Walk the content root; a missing root is an empty tree, not an error."""
    if not root.is_dir():
        logger.info("Content root %s does not exist; using an empty tree", root)
        return []
    return walk_directory(root, ext, parse)
