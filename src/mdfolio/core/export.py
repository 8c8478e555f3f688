"""Export: serialize the content tree as JSON or an ES module and write it out"""

import json
import os
from pathlib import Path

from markdown_it import MarkdownIt

from mdfolio.core.models import PageNode, TextBlock, dump_nodes
from mdfolio.core.tree import iter_nodes


OUTPUT_FORMATS = ('json', 'js')


def render_html(nodes: list, preset: str = 'gfm-like') -> list:
    """Return a copy of nodes where every text block also carries its rendered HTML."""
    try:
        md = MarkdownIt(preset, options_update={"linkify": False})
    except KeyError as e:
        raise ValueError(f"Unknown MarkdownIt preset {preset!r}") from e
    rendered = [n.model_copy(deep=True) for n in nodes]
    for node in iter_nodes(rendered):
        if isinstance(node, PageNode):
            for block in node.blocks:
                if isinstance(block, TextBlock):
                    block.html = md.render(block.body)
    return rendered


def to_json(nodes: list) -> str:
    return json.dumps(dump_nodes(nodes), indent=2, ensure_ascii=False)


def to_js_module(nodes: list, export_name: str = 'contentTree') -> str:
    """Return an ES module exporting the tree as a single named constant."""
    return f"export const {export_name} = {to_json(nodes)}\n"


def serialize(nodes: list, fmt: str = 'json', export_name: str = 'contentTree') -> str:
    if fmt == 'json':
        return to_json(nodes) + "\n"
    if fmt == 'js':
        return to_js_module(nodes, export_name)
    raise ValueError(f"Unknown output format {fmt!r}; expected one of {', '.join(OUTPUT_FORMATS)}")


def write_output(nodes: list, path: Path, fmt: str = 'json', export_name: str = 'contentTree') -> Path:
    """Write the serialized tree to path, replacing any previous file in one step."""
    text = serialize(nodes, fmt, export_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_text(text, encoding='utf-8')
        os.replace(tmp, path)
    except OSError as e:
        raise RuntimeError(f"Failed to write {path}: {e}") from e
    return path
