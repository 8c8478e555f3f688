"""Owner of the generated content tree with explicit invalidate/rebuild"""

import logging
from pathlib import Path
from typing import Optional

from mdfolio.core.models import ParsedPage
from mdfolio.core.parse import parse_content
from mdfolio.core.utils.hashing import sha256
from mdfolio.core.walk import DEFAULT_EXT, build_tree


logger = logging.getLogger(__name__)


class ContentCache:
    """Holds the current content tree for one content root.

    The tree is built lazily on first access and replaced wholesale by
    rebuild(); invalidate() drops it so the next access rebuilds. Parsed
    files are memoized by (path, content hash) across rebuilds, which never
    changes the result, only skips re-parsing unchanged files.
    """

    def __init__(self, root: Path, ext: str = DEFAULT_EXT, memoize: bool = True):
        self.root = Path(root)
        self.ext = ext
        self.memoize = memoize
        self.builds = 0
        self._tree: Optional[list] = None
        self._parsed: dict[Path, tuple[str, ParsedPage]] = {}

    @property
    def tree(self) -> list:
        if self._tree is None:
            return self.rebuild()
        return self._tree

    @property
    def is_valid(self) -> bool:
        return self._tree is not None

    def invalidate(self) -> None:
        self._tree = None

    def rebuild(self) -> list:
        """Build a fresh tree from the file system and swap it in."""
        seen: set[Path] = set()

        def parse(path: Path) -> ParsedPage:
            seen.add(path)
            return self._parse(path)

        tree = build_tree(self.root, self.ext, parse)
        for stale in self._parsed.keys() - seen:
            del self._parsed[stale]
        self._tree = tree
        self.builds += 1
        logger.info("Built content tree from %s (%d top-level nodes)", self.root, len(tree))
        return tree

    def _parse(self, path: Path) -> ParsedPage:
        raw = path.read_text(encoding='utf-8', errors='replace')
        if not self.memoize:
            return parse_content(raw, path.stem, source=str(path))
        digest = sha256(raw)
        hit = self._parsed.get(path)
        if hit is None or hit[0] != digest:
            hit = (digest, parse_content(raw, path.stem, source=str(path)))
            self._parsed[path] = hit
        return hit[1].model_copy(deep=True)
