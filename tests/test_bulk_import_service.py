"""Tests for reading and checking uploaded files."""

import io

import pytest
from starlette.datastructures import UploadFile

from gainai.config import settings
from gainai.exceptions import InvalidInputError
from gainai.services.bulk_import_service import BulkImportService, decode_csv


@pytest.fixture
def one_mb_limit(monkeypatch: pytest.MonkeyPatch) -> int:
    monkeypatch.setattr(settings, "max_upload_size_mb", 1)
    return settings.max_upload_size_bytes


@pytest.mark.asyncio
async def test_read_upload_returns_content(one_mb_limit: int) -> None:
    file = UploadFile(io.BytesIO(b"name\nAcme\n"), filename="clients.csv")

    content = await BulkImportService(job_service=object()).read_upload(file, chunk_size=4)

    assert content == b"name\nAcme\n"


@pytest.mark.asyncio
async def test_read_upload_stops_once_over_the_limit(one_mb_limit: int) -> None:
    buffer = io.BytesIO(b"x" * (one_mb_limit * 3))
    file = UploadFile(buffer, filename="clients.csv")

    with pytest.raises(InvalidInputError, match="1MB upload limit"):
        await BulkImportService(job_service=object()).read_upload(file, chunk_size=1024)

    assert buffer.tell() <= one_mb_limit + 1024


@pytest.mark.asyncio
async def test_read_upload_trusts_a_declared_size(one_mb_limit: int) -> None:
    buffer = io.BytesIO(b"name\n")
    file = UploadFile(buffer, size=one_mb_limit + 1, filename="clients.csv")

    with pytest.raises(InvalidInputError, match="upload limit"):
        await BulkImportService(job_service=object()).read_upload(file)

    assert buffer.tell() == 0


@pytest.mark.asyncio
async def test_read_upload_checks_the_extension_before_reading() -> None:
    buffer = io.BytesIO(b"name\n")
    file = UploadFile(buffer, filename="clients.xlsx")

    with pytest.raises(InvalidInputError, match="File must be a CSV"):
        await BulkImportService(job_service=object()).read_upload(file)

    assert buffer.tell() == 0


def test_check_file_rejects_oversized_content(one_mb_limit: int) -> None:
    with pytest.raises(InvalidInputError, match="upload limit"):
        BulkImportService(job_service=object()).check_file("clients.csv", b"x" * (one_mb_limit + 1))


def test_decode_csv_drops_byte_order_mark() -> None:
    assert decode_csv("\ufeffname\n".encode("utf-8")) == "name\n"
