from pathlib import Path

import pytest

from book_highlights.sources import SourceListError, SourceReadError, VaultDirectorySource


def make_vault(tmp_path: Path) -> Path:
    vault = tmp_path / "vault"
    (vault / "Books").mkdir(parents=True)
    (vault / "Books" / "Dune by Frank Herbert.md").write_text("---\ntitle: Dune\n---\n", encoding="utf-8")
    (vault / "inbox.md").write_text("# Inbox\n", encoding="utf-8")
    (vault / "cover.png").write_bytes(b"\x89PNG")
    return vault


def test_lists_markdown_notes_with_posix_paths(tmp_path: Path) -> None:
    source = VaultDirectorySource(make_vault(tmp_path))

    assert source.list_documents() == ["Books/Dune by Frank Herbert.md", "inbox.md"]


def test_reads_note_text(tmp_path: Path) -> None:
    source = VaultDirectorySource(make_vault(tmp_path))

    assert source.read_document("inbox.md") == "# Inbox\n"


def test_missing_note_raises_read_error(tmp_path: Path) -> None:
    source = VaultDirectorySource(make_vault(tmp_path))

    with pytest.raises(SourceReadError):
        source.read_document("missing.md")


def test_missing_vault_raises_list_error(tmp_path: Path) -> None:
    source = VaultDirectorySource(tmp_path / "nowhere")

    with pytest.raises(SourceListError):
        source.list_documents()


def test_snapshot_tracks_modification_times(tmp_path: Path) -> None:
    vault = make_vault(tmp_path)
    source = VaultDirectorySource(vault)

    snapshot = source.snapshot()

    assert set(snapshot) == {"Books/Dune by Frank Herbert.md", "inbox.md"}
    assert all(isinstance(stamp, int) for stamp in snapshot.values())
