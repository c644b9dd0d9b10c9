"""
Tests for FilePayloadSource.
"""
import json

import pytest

from unifiedanalytics.adapters.source.file_source import FilePayloadSource
from unifiedanalytics.core.ports.payload_source import PayloadSource


@pytest.mark.asyncio
async def test_load_json(tmp_path, sample_payload):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(sample_payload))

    source = FilePayloadSource(path)

    assert isinstance(source, PayloadSource)
    assert await source.load() == sample_payload


@pytest.mark.asyncio
async def test_load_yaml(tmp_path):
    path = tmp_path / "payload.yaml"
    path.write_text("""
historical:
  - date: "2024-01-01"
    revenue: 100
predictions: []
period_days: 30
    """)

    data = await FilePayloadSource(str(path)).load()

    assert data["historical"][0]["revenue"] == 100
    assert data["period_days"] == 30


@pytest.mark.asyncio
async def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        await FilePayloadSource(tmp_path / "absent.json").load()


@pytest.mark.asyncio
async def test_corrupt_json(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text("{not json")

    with pytest.raises(RuntimeError, match="Failed to decode payload"):
        await FilePayloadSource(path).load()
