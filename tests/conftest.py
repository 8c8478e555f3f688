"""Root test configuration: isolate each test from config files and MDFOLIO_ env vars"""

import pytest

from mdfolio.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDFOLIO_<FIELD> variables so settings come only from what a test sets."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MDFOLIO_{name.upper()}", raising=False)


@pytest.fixture(name="content_root")
def content_root_fixture(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture(name="write")
def write_fixture(content_root):
    """Write a file under the content root, creating parent directories."""
    def _write(rel: str, text: str = "Body.\n"):
        p = content_root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return p
    return _write
