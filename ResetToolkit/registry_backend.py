#!/usr/bin/env python3
"""
Windows Reset Toolkit Registry Backend

This module exports, imports and deletes registry keys through reg.exe so
backups hold standard .reg files that can also be restored by hand.
"""

import subprocess
from typing import List

from ResetToolkit.errors import RegistryError
from ResetToolkit.logger import get_module_logger

logger = get_module_logger('registry_backend')

TIMEOUT = 30  # seconds

HIVE_ALIASES = {
    "HKLM": "HKLM",
    "HKEY_LOCAL_MACHINE": "HKLM",
    "HKCU": "HKCU",
    "HKEY_CURRENT_USER": "HKCU",
    "HKCR": "HKCR",
    "HKEY_CLASSES_ROOT": "HKCR",
    "HKU": "HKU",
    "HKEY_USERS": "HKU",
    "HKCC": "HKCC",
    "HKEY_CURRENT_CONFIG": "HKCC",
}

def normalize_key_path(key_path: str) -> str:
    """
    Normalize a registry key path to reg.exe's short hive form.

    Args:
        key_path: Key path such as "HKEY_LOCAL_MACHINE\\SOFTWARE\\Foo"

    Returns:
        str: Normalized path such as "HKLM\\SOFTWARE\\Foo"

    Raises:
        ValueError: If the path is empty or names an unknown hive
    """
    cleaned = key_path.strip().replace('/', '\\').strip('\\')
    if not cleaned:
        raise ValueError("Registry key path is empty")

    hive, _, rest = cleaned.partition('\\')
    short_hive = HIVE_ALIASES.get(hive.upper())
    if short_hive is None:
        raise ValueError(f"Unknown registry hive '{hive}' in '{key_path}'")

    return f"{short_hive}\\{rest}" if rest else short_hive

class RegExeBackend:
    """Registry access through the reg.exe command line tool."""

    def __init__(self, timeout: int = TIMEOUT):
        self.timeout = timeout

    def _run(self, args: List[str], key_path: str = None) -> subprocess.CompletedProcess:
        cmd = ["reg"] + args
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError:
            raise RegistryError("reg.exe not found, registry operations require Windows",
                                key_path=key_path)
        except subprocess.TimeoutExpired:
            raise RegistryError(f"reg {args[0]} timed out after {self.timeout} seconds",
                                key_path=key_path)

    def _check(self, result: subprocess.CompletedProcess, action: str, key_path: str) -> None:
        if result.returncode != 0:
            stderr = (result.stderr or result.stdout or "").strip()
            raise RegistryError(f"Could not {action} {key_path}: {stderr or 'unknown error'}",
                                key_path=key_path, stderr=stderr)

    def key_exists(self, key_path: str) -> bool:
        """
        Check whether a registry key exists.

        Args:
            key_path: Registry key path

        Returns:
            bool: True if the key exists
        """
        key_path = normalize_key_path(key_path)
        result = self._run(["query", key_path], key_path)
        return result.returncode == 0

    def export_key(self, key_path: str, dest_file: str) -> None:
        """
        Export a registry key and its subkeys to a .reg file.

        Args:
            key_path: Registry key path
            dest_file: Destination .reg file, overwritten if present
        """
        key_path = normalize_key_path(key_path)
        result = self._run(["export", key_path, dest_file, "/y"], key_path)
        self._check(result, "export", key_path)
        logger.debug(f"Exported {key_path} to {dest_file}")

    def import_file(self, src_file: str) -> None:
        """
        Import a .reg file.

        Args:
            src_file: Path to the .reg file
        """
        result = self._run(["import", src_file], src_file)
        self._check(result, "import", src_file)
        logger.debug(f"Imported {src_file}")

    def delete_key(self, key_path: str) -> None:
        """
        Delete a registry key and its subkeys.

        Args:
            key_path: Registry key path
        """
        key_path = normalize_key_path(key_path)
        result = self._run(["delete", key_path, "/f"], key_path)
        self._check(result, "delete", key_path)
        logger.debug(f"Deleted {key_path}")
