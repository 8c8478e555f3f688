"""Unit tests for core/walk.py"""

import logging

from mdfolio.core.models import FolderNode, PageNode, dump_nodes
from mdfolio.core.walk import build_tree, is_hidden, walk_directory


def _names(nodes: list) -> list[str]:
    return [n.name for n in nodes]


def test_sort_order_explicit_then_unordered(content_root, write):
    """Explicit order keys ascend first; unordered pages sort last."""
    write("c.md", "---\nname: C\norder: 3\n---\n")
    write("a.md", "---\nname: A\norder: 1\n---\n")
    write("b.md", "---\nname: B\n---\n")
    assert _names(walk_directory(content_root)) == ["A", "C", "B"]


def test_sort_ties_broken_by_name(content_root, write):
    """Pages with equal keys (or none) sort by name, case-insensitively."""
    write("x.md", "---\nname: beta\norder: 1\n---\n")
    write("y.md", "---\nname: Alpha\norder: 1\n---\n")
    write("z.md", "---\nname: zeta\n---\n")
    write("w.md", "---\nname: Gamma\n---\n")
    assert _names(walk_directory(content_root)) == ["Alpha", "beta", "Gamma", "zeta"]


def test_folder_before_page(content_root, write):
    """Folders always precede pages, whatever their names."""
    write("aaa.md")
    write("zzz-folder/page.md")
    nodes = walk_directory(content_root)
    assert isinstance(nodes[0], FolderNode)
    assert isinstance(nodes[1], PageNode)
    assert nodes[0].name == "Zzz Folder"


def test_folders_sorted_alphabetically(content_root, write):
    write("web-tools/a.md")
    write("archive/b.md")
    write("Music/c.md")
    assert _names(walk_directory(content_root)) == ["Archive", "Music", "Web Tools"]


def test_folder_node_fields(content_root, write):
    """Folder id is the raw directory name; name is title-cased."""
    write("side-projects/thing.md")
    [folder] = dump_nodes(walk_directory(content_root))
    assert folder == {
        "id": "side-projects",
        "type": "folder",
        "name": "Side Projects",
        "children": [{
            "id": "thing", "type": "page", "name": "Thing",
            "blocks": [{"type": "text", "body": "Body."}],
        }],
    }


def test_hidden_entries_skipped(content_root, write):
    """Entries starting with '_' or '.' are ignored, files and directories alike."""
    write("_draft.md")
    write(".secret.md")
    write("_private/page.md")
    write(".git/page.md")
    write("visible.md")
    assert _names(walk_directory(content_root)) == ["Visible"]


def test_empty_folders_eliminated(content_root, write):
    """Folders whose whole subtree is hidden, empty, or non-content are dropped."""
    (content_root / "empty").mkdir()
    write("only-hidden/_draft.md")
    write("nested/deeper/_x.md")
    write("assets/logo.png", "png")
    write("keep/page.md")
    assert _names(walk_directory(content_root)) == ["Keep"]


def test_non_content_files_ignored(content_root, write):
    write("notes.txt")
    write("page.markdown")
    assert walk_directory(content_root) == []


def test_custom_extension(content_root, write):
    write("a.mdx")
    write("b.md")
    assert _names(walk_directory(content_root, ext=".mdx")) == ["A"]


def test_idempotent(content_root, write):
    """Walking an unchanged tree twice gives deep-equal output."""
    write("a/b/c.md", "---\norder: 2\n---\n## T\nx\n")
    write("a/d.md", "![i](i.png)\n> cap\n")
    write("e.md")
    assert dump_nodes(walk_directory(content_root)) == dump_nodes(walk_directory(content_root))


def test_walk_does_not_modify_files(content_root, write):
    p = write("a.md", "---\nname: A\n---\nBody\n")
    before = p.read_text()
    walk_directory(content_root)
    assert p.read_text() == before
    assert sorted(x.name for x in content_root.iterdir()) == ["a.md"]


def test_build_tree_missing_root(tmp_path):
    """A missing content root yields an empty tree, not an error."""
    assert build_tree(tmp_path / "nope") == []
    assert not (tmp_path / "nope").exists()


def test_is_hidden():
    assert is_hidden("_x") and is_hidden(".x")
    assert not is_hidden("x_")


def test_invalid_utf8_file_does_not_break_walk(content_root, write):
    """Undecodable bytes are replaced; the page and its siblings still build."""
    write("good.md")
    (content_root / "bad.md").write_bytes(b"caf\xe9\n")
    nodes = walk_directory(content_root)
    assert _names(nodes) == ["Bad", "Good"]
    assert nodes[0].blocks[0].body == "caf\ufffd"


def test_dangling_symlink_skipped(content_root, write, caplog):
    """A content entry that cannot be read is logged and left out."""
    write("good.md")
    (content_root / "dangling.md").symlink_to(content_root / "missing-target.md")
    with caplog.at_level(logging.WARNING):
        assert _names(walk_directory(content_root)) == ["Good"]
    assert "dangling.md" in caplog.text
