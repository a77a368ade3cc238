"""Unit tests for ExportStorage."""

import pytest

from app.exceptions import StorageError
from app.models import RenderedDocument


def _document(filename: str = "Acme_proposal.pdf") -> RenderedDocument:
    return RenderedDocument(
        document_id="PROP-20250304-abcd", filename=filename, content=b"%PDF-1.4 test", page_count=1
    )


async def test_save_and_get(export_storage):
    path = await export_storage.save(_document())
    assert path.read_bytes() == b"%PDF-1.4 test"
    assert await export_storage.get("Acme_proposal.pdf") == b"%PDF-1.4 test"


async def test_get_missing_returns_none(export_storage):
    assert await export_storage.get("missing.pdf") is None


async def test_get_ignores_directory_parts(export_storage):
    await export_storage.save(_document())
    assert await export_storage.get("../saved/Acme_proposal.pdf") == b"%PDF-1.4 test"


async def test_list_and_delete(export_storage):
    await export_storage.save(_document("a.pdf"))
    await export_storage.save(_document("b.pdf"))
    assert sorted(p.name for p in export_storage.list_exports()) == ["a.pdf", "b.pdf"]

    assert export_storage.delete("a.pdf") is True
    assert export_storage.delete("a.pdf") is False
    assert [p.name for p in export_storage.list_exports()] == ["b.pdf"]


async def test_save_failure_raises_storage_error(export_storage):
    with pytest.raises(StorageError) as exc_info:
        await export_storage.save(_document("missing_dir/file.pdf"))
    assert exc_info.value.error_code == "ERR_STORE_001"


async def test_save_overwrites_by_default(export_storage):
    await export_storage.save(_document())
    path = await export_storage.save(_document().model_copy(update={"content": b"%PDF-1.4 new"}))
    assert path.name == "Acme_proposal.pdf"
    assert path.read_bytes() == b"%PDF-1.4 new"
    assert len(export_storage.list_exports()) == 1


async def test_save_without_overwrite_numbers_the_name(export_storage):
    first = await export_storage.save(_document(), overwrite=False)
    second = await export_storage.save(_document(), overwrite=False)
    third = await export_storage.save(_document(), overwrite=False)
    assert [first.name, second.name, third.name] == [
        "Acme_proposal.pdf",
        "Acme_proposal_2.pdf",
        "Acme_proposal_3.pdf",
    ]
    assert len(export_storage.list_exports()) == 3


async def test_failed_replace_leaves_no_partial_file(export_storage, monkeypatch):
    import aiofiles.os

    async def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(aiofiles.os, "replace", failing_replace)
    with pytest.raises(StorageError):
        await export_storage.save(_document())
    assert list(export_storage.base_path.iterdir()) == []


async def test_failed_save_keeps_previous_file(export_storage, monkeypatch):
    import aiofiles.os

    await export_storage.save(_document())

    async def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(aiofiles.os, "replace", failing_replace)
    with pytest.raises(StorageError):
        await export_storage.save(_document().model_copy(update={"content": b"%PDF-1.4 new"}))
    assert await export_storage.get("Acme_proposal.pdf") == b"%PDF-1.4 test"
    assert [p.name for p in export_storage.base_path.iterdir()] == ["Acme_proposal.pdf"]
