"""Pipeline step functions: build the site tree, write it, and rebuild on change"""

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from mdfolio.config import Settings
from mdfolio.core.cache import ContentCache
from mdfolio.core.export import render_html, write_output
from mdfolio.core.tree import check_duplicate_ids, load_root_entries, merge_tree
from mdfolio.core.watch import Change, ContentWatcher


logger = logging.getLogger(__name__)


def make_cache(settings: Settings) -> ContentCache:
    return ContentCache(Path(settings.content_dir), settings.content_ext)


def site_tree(settings: Settings, cache: ContentCache) -> list:
    """Return root entries + content tree, with the duplicate-id policy applied."""
    root_entries = load_root_entries(Path(settings.root_file)) if settings.root_file else []
    tree = merge_tree(root_entries, cache.tree)
    check_duplicate_ids(tree, settings.duplicate_ids)
    if settings.render_html:
        tree = render_html(tree, settings.parser_config)
    return tree


def run_build(settings: Settings, cache: Optional[ContentCache] = None) -> tuple[list, Path]:
    """Build the site tree and write it to settings.output_file. Returns (tree, output_path)."""
    cache = cache or make_cache(settings)
    tree = site_tree(settings, cache)
    out = write_output(tree, Path(settings.output_file), settings.output_format, settings.export_name)
    logger.info("Wrote %s", out)
    return tree, out


def run_watch(
    settings: Settings,
    on_reload: Optional[Callable[[list[Change]], None]] = None,
    stop: Optional[threading.Event] = None,
    max_polls: Optional[int] = None,
    ) -> ContentWatcher:
    """Build once, then rebuild and rewrite the output after every content change."""
    cache = make_cache(settings)
    watcher = ContentWatcher(cache, settings.poll_interval)
    run_build(settings, cache)

    def rebuild(changes: list[Change]) -> None:
        try:
            run_build(settings, cache)
        except (ValueError, RuntimeError, OSError) as e:
            logger.error("Rebuild failed, keeping previous output: %s", e)
            return
        if on_reload:
            on_reload(changes)

    watcher.subscribe(rebuild)
    watcher.run(stop=stop, max_polls=max_polls)
    return watcher
