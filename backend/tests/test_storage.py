"""Tests for project file uploads to Supabase Storage."""

from __future__ import annotations

import httpx
import pytest

from quickcut.services.storage import StorageService, build_storage_path


def test_storage_path_uses_owner_folder_and_timestamp() -> None:
    assert build_storage_path("u-1", "Final Cut.MOV", now_ms=1700000000000) == "u-1/1700000000000.MOV"
    assert build_storage_path("u-1", "README", now_ms=5) == "u-1/5.bin"


def test_public_url_encodes_segments() -> None:
    service = StorageService()
    assert service.public_url("u 1/clip.mp4") == (
        "https://example.supabase.co/storage/v1/object/public/project-files/u%201/clip.mp4"
    )


@pytest.mark.asyncio
async def test_upload_sends_service_key() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"Key": "project-files/u-1/1.mp4"})

    result = await StorageService(transport=httpx.MockTransport(handler)).upload_bytes(b"abc", "u-1/1.mp4", "video/mp4")

    assert result.success is True
    assert result.path == "u-1/1.mp4"
    request = seen[0]
    assert str(request.url) == "https://example.supabase.co/storage/v1/object/project-files/u-1/1.mp4"
    assert request.headers["authorization"] == "Bearer service-role-key"
    assert request.content == b"abc"


@pytest.mark.asyncio
async def test_upload_failure_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out")

    result = await StorageService(transport=httpx.MockTransport(handler)).upload_bytes(b"abc", "u-1/1.mp4")
    assert result.success is False
    assert "timed out" in result.error
