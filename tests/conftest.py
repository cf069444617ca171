"""
Configuration for pytest.

This file contains pytest configuration hooks and shared fixtures.
"""

import os
import sys
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ResetToolkit.errors import RegistryError
from ResetToolkit.registry_backend import normalize_key_path

REG_HEADER = "Windows Registry Editor Version 5.00"

class FakeRegistry:
    """
    In-memory stand-in for RegExeBackend.

    Each key holds "name=value" lines. Exports write a minimal .reg file and
    imports merge it into the key the way reg import does: values in the file
    are set, values only in the key are left alone.
    """

    def __init__(self, keys=None):
        self.keys = {normalize_key_path(k): v for k, v in (keys or {}).items()}
        self.imported = []
        self.fail_next_imports = 0
        self.fail_imports = set()
        self.fail_exports = set()

    def key_exists(self, key_path):
        return normalize_key_path(key_path) in self.keys

    def export_key(self, key_path, dest_file):
        key = normalize_key_path(key_path)
        if key in self.fail_exports or key not in self.keys:
            raise RegistryError(f"Could not export {key}", key_path=key)
        with open(dest_file, 'w', encoding='utf-8') as f:
            f.write(f"{REG_HEADER}\n\n[{key}]\n{self.keys[key]}\n")

    def import_file(self, src_file):
        with open(src_file, 'r', encoding='utf-8') as f:
            parts = f.read().split("\n", 3)
        key = parts[2][1:-1]

        if self.fail_next_imports > 0:
            self.fail_next_imports -= 1
            raise RegistryError(f"Could not import {src_file}", key_path=key)
        # One-shot failure for a specific key
        if key in self.fail_imports:
            self.fail_imports.discard(key)
            raise RegistryError(f"Could not import {src_file}", key_path=key)

        values = parse_values(self.keys.get(key, ""))
        values.update(parse_values(parts[3]))
        self.keys[key] = "\n".join(f"{name}={value}" for name, value in values.items())
        self.imported.append(key)

    def delete_key(self, key_path):
        self.keys.pop(normalize_key_path(key_path), None)

def parse_values(content):
    """Turn "name=value" lines into an ordered dict."""
    values = {}
    for line in content.splitlines():
        if "=" in line:
            name, value = line.split("=", 1)
            values[name] = value
    return values

@pytest.fixture
def fake_registry():
    """A registry with two keys in it."""
    return FakeRegistry({
        r"HKCU\Control Panel\Desktop": "WallPaper=old.jpg",
        r"HKLM\SYSTEM\CurrentControlSet\Control\Power": "HibernateEnabled=1",
    })

@pytest.fixture
def backup_root(tmp_path):
    """Directory backups are written to."""
    return tmp_path / "backups"

@pytest.fixture
def manager(backup_root, fake_registry):
    """BackupManager with explicit settings, independent of any config file."""
    from ResetToolkit.backup_manager import BackupManager
    return BackupManager(
        backup_dir=str(backup_root),
        registry=fake_registry,
        compress=False,
        verify_on_restore=True,
        rollback_on_failure=True,
        retention_days=30,
        keep_latest=0,
    )

@pytest.fixture
def sample_files(tmp_path):
    """Two small files standing in for configuration files."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    hosts = data_dir / "hosts"
    hosts.write_text("127.0.0.1 localhost\n")
    layout = data_dir / "LayoutModification.xml"
    layout.write_text("<LayoutModificationTemplate />\n")
    return [hosts, layout]
