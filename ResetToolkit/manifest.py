#!/usr/bin/env python3
"""
Windows Reset Toolkit Backup Manifest

A manifest records what a backup captured: every registry key and file, where
its copy lives inside the backup, and the SHA-256 of that copy.
"""

import datetime
import getpass
import hashlib
import json
import os
import platform
import zipfile
from typing import Any, BinaryIO, Dict, List, Optional

from ResetToolkit.errors import ManifestError

MANIFEST_NAME = "manifest.json"
MANIFEST_FORMAT = 1
CHUNK_SIZE = 65536

REQUIRED_FIELDS = ("format", "backup_id", "name", "created", "registry", "files")

def stream_checksum(fileobj: BinaryIO) -> str:
    """Compute the SHA-256 of an open binary stream."""
    digest = hashlib.sha256()
    for chunk in iter(lambda: fileobj.read(CHUNK_SIZE), b""):
        digest.update(chunk)
    return digest.hexdigest()

def file_checksum(path: str) -> str:
    """Compute the SHA-256 of a file."""
    with open(path, 'rb') as f:
        return stream_checksum(f)

def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"

def new_manifest(backup_id: str,
                 name: str,
                 created: datetime.datetime,
                 tool_version: str,
                 description: Optional[str] = None) -> Dict[str, Any]:
    """
    Create an empty manifest for a backup about to be written.

    Args:
        backup_id: Unique backup id (also the directory or archive name)
        name: Backup name as given by the caller
        created: Creation time
        tool_version: Toolkit version writing the backup
        description: Optional free text

    Returns:
        Dict: Manifest with empty entry lists
    """
    return {
        "format": MANIFEST_FORMAT,
        "backup_id": backup_id,
        "name": name,
        "description": description or "",
        "created": created.isoformat(timespec='seconds'),
        "tool_version": tool_version,
        "computer": platform.node(),
        "user": _current_user(),
        "registry": [],
        "files": [],
        "skipped": [],
    }

def parse_created(manifest: Dict[str, Any]) -> datetime.datetime:
    """Parse a manifest's creation timestamp."""
    try:
        return datetime.datetime.fromisoformat(manifest["created"])
    except (KeyError, TypeError, ValueError) as e:
        raise ManifestError(f"Invalid creation timestamp in manifest: {e}")

def validate_manifest(manifest: Any) -> Dict[str, Any]:
    """
    Check that a manifest has every field and entry restore relies on.

    Args:
        manifest: Parsed manifest

    Returns:
        Dict: The same manifest

    Raises:
        ManifestError: On the first problem found
    """
    if not isinstance(manifest, dict):
        raise ManifestError("Manifest is not a JSON object")

    missing = [field for field in REQUIRED_FIELDS if field not in manifest]
    if missing:
        raise ManifestError(f"Manifest is missing fields: {', '.join(missing)}")

    if manifest["format"] != MANIFEST_FORMAT:
        raise ManifestError(f"Unsupported manifest format {manifest['format']}")

    for entry in manifest["registry"]:
        if not isinstance(entry, dict) or not {"path", "file", "sha256"} <= entry.keys():
            raise ManifestError(f"Malformed registry entry: {entry!r}")

    for entry in manifest["files"]:
        if not isinstance(entry, dict) or not {"source", "file", "sha256"} <= entry.keys():
            raise ManifestError(f"Malformed file entry: {entry!r}")

    parse_created(manifest)
    return manifest

def write_manifest(backup_dir: str, manifest: Dict[str, Any]) -> str:
    """
    Write a manifest into a backup directory.

    Returns:
        str: Path of the written manifest
    """
    path = os.path.join(backup_dir, MANIFEST_NAME)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(manifest, f, indent=2)
    return path

def read_manifest(location: str) -> Dict[str, Any]:
    """
    Read and validate the manifest of a backup directory or .zip archive.

    Args:
        location: Backup directory or archive path

    Returns:
        Dict: Validated manifest

    Raises:
        ManifestError: If the manifest is missing or invalid
    """
    try:
        if zipfile.is_zipfile(location):
            with zipfile.ZipFile(location, 'r') as archive:
                raw = archive.read(MANIFEST_NAME)
        else:
            with open(os.path.join(location, MANIFEST_NAME), 'rb') as f:
                raw = f.read()
        manifest = json.loads(raw.decode('utf-8'))
    except KeyError:
        raise ManifestError(f"No {MANIFEST_NAME} in {location}")
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise ManifestError(f"Cannot read manifest from {location}: {e}")

    return validate_manifest(manifest)

def manifest_entries(manifest: Dict[str, Any]) -> List[Dict[str, Any]]:
    """All registry and file entries, registry first."""
    return list(manifest["registry"]) + list(manifest["files"])

def entry_target(entry: Dict[str, Any]) -> str:
    """The registry key or file path an entry restores to."""
    return entry.get("path") or entry["source"]
