"""Unit tests for core/export.py"""

import json

import pytest

from mdfolio.core.export import render_html, serialize, to_js_module, write_output
from mdfolio.core.models import FolderNode, PageNode, TextBlock, VideoBlock


@pytest.fixture(name="tree")
def tree_fixture():
    return [
        FolderNode(id="work", name="Work", children=[
            PageNode(id="p", name="P", year=2024, blocks=[
                TextBlock(title="Intro", body="Some **bold** text."),
                VideoBlock(embed_url="https://www.youtube.com/embed/x"),
            ]),
        ]),
    ]


def test_json_uses_aliases_and_omits_nulls(tree):
    data = json.loads(serialize(tree, "json"))
    page = data[0]["children"][0]
    assert page["blocks"][1] == {"type": "video", "embedUrl": "https://www.youtube.com/embed/x"}
    assert "featured" not in page
    assert "html" not in page["blocks"][0]


def test_js_module(tree):
    """js output is an ES module exporting the tree under the given name."""
    text = to_js_module(tree, "contentTree")
    prefix = "export const contentTree = "
    assert text.startswith(prefix)
    assert json.loads(text[len(prefix):]) == json.loads(serialize(tree, "json"))


def test_empty_tree_js():
    assert to_js_module([]) == "export const contentTree = []\n"


def test_unknown_format(tree):
    with pytest.raises(ValueError, match="Unknown output format"):
        serialize(tree, "xml")


def test_write_output_creates_dirs(tmp_path, tree):
    out = write_output(tree, tmp_path / "gen" / "content.json")
    assert json.loads(out.read_text())[0]["id"] == "work"
    assert [p.name for p in out.parent.iterdir()] == ["content.json"]


def test_write_output_replaces(tmp_path, tree):
    out = tmp_path / "content.js"
    out.write_text("stale")
    write_output(tree, out, "js", "pages")
    assert out.read_text().startswith("export const pages = ")


def test_render_html_adds_html_without_mutating(tree):
    """render_html returns a copy; the source tree keeps html unset."""
    rendered = render_html(tree)
    block = rendered[0].children[0].blocks[0]
    assert "<strong>bold</strong>" in block.html
    assert tree[0].children[0].blocks[0].html is None


def test_render_html_unknown_preset(tree):
    """An unknown MarkdownIt preset is reported as a ValueError."""
    with pytest.raises(ValueError, match="Unknown MarkdownIt preset 'nope'"):
        render_html(tree, "nope")
