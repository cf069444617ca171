"""
Tests for backup manifests.
"""

import datetime
import io
import json
import zipfile

import pytest

from ResetToolkit.errors import ManifestError
from ResetToolkit.manifest import (
    MANIFEST_NAME, entry_target, file_checksum, new_manifest, parse_created,
    read_manifest, stream_checksum, validate_manifest, write_manifest
)

ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

@pytest.fixture
def manifest():
    created = datetime.datetime(2025, 3, 14, 9, 26, 53, 589793)
    data = new_manifest("net_20250314-092653", "net", created, "1.2.0", "before network reset")
    data["registry"].append({"path": r"HKLM\SOFTWARE\X", "file": "registry/001_X.reg",
                             "sha256": ABC_SHA256, "size": 3})
    data["files"].append({"source": r"C:\Windows\System32\drivers\etc\hosts", "file": "files/001_hosts",
                          "sha256": ABC_SHA256, "size": 3})
    return data

def test_checksums(tmp_path):
    path = tmp_path / "abc.txt"
    path.write_bytes(b"abc")
    assert file_checksum(str(path)) == ABC_SHA256
    assert stream_checksum(io.BytesIO(b"abc")) == ABC_SHA256

def test_new_manifest_fields(manifest):
    assert manifest["created"] == "2025-03-14T09:26:53"
    assert manifest["description"] == "before network reset"
    assert manifest["skipped"] == []
    assert parse_created(manifest) == datetime.datetime(2025, 3, 14, 9, 26, 53)

def test_roundtrip_through_directory(tmp_path, manifest):
    write_manifest(str(tmp_path), manifest)
    assert read_manifest(str(tmp_path)) == manifest

def test_read_from_zip(tmp_path, manifest):
    archive_path = tmp_path / "net.zip"
    with zipfile.ZipFile(archive_path, 'w') as archive:
        archive.writestr(MANIFEST_NAME, json.dumps(manifest))
    assert read_manifest(str(archive_path))["backup_id"] == "net_20250314-092653"

def test_zip_without_manifest(tmp_path):
    archive_path = tmp_path / "empty.zip"
    with zipfile.ZipFile(archive_path, 'w') as archive:
        archive.writestr("files/001_hosts", "x")
    with pytest.raises(ManifestError):
        read_manifest(str(archive_path))

def test_missing_and_corrupt_manifest(tmp_path):
    with pytest.raises(ManifestError):
        read_manifest(str(tmp_path))

    (tmp_path / MANIFEST_NAME).write_text("{not json")
    with pytest.raises(ManifestError):
        read_manifest(str(tmp_path))

@pytest.mark.parametrize("mutate", [
    lambda m: m.pop("registry"),
    lambda m: m.update(format=99),
    lambda m: m.update(created="yesterday"),
    lambda m: m["files"].append({"source": "C:\\x"}),
    lambda m: m["registry"].append("HKLM\\SOFTWARE"),
])
def test_validate_rejects_malformed(manifest, mutate):
    mutate(manifest)
    with pytest.raises(ManifestError):
        validate_manifest(manifest)

def test_validate_rejects_non_object():
    with pytest.raises(ManifestError):
        validate_manifest(["not", "a", "dict"])

def test_entry_target(manifest):
    assert entry_target(manifest["registry"][0]) == r"HKLM\SOFTWARE\X"
    assert entry_target(manifest["files"][0]) == r"C:\Windows\System32\drivers\etc\hosts"
