#!/usr/bin/env python3
"""
Windows Reset Toolkit Exceptions
"""


class ResetToolkitError(Exception):
    """Base class for all toolkit errors."""


class BackupError(ResetToolkitError):
    """A backup could not be created, read or removed."""


class BackupNotFoundError(BackupError):
    """No backup matches the requested name or id."""


class BackupLockedError(BackupError):
    """The backup is already held by an in-progress restore."""


class ManifestError(BackupError):
    """A backup manifest is missing, unreadable or malformed."""


class RegistryError(ResetToolkitError):
    """A reg.exe invocation failed."""

    def __init__(self, message: str, key_path: str = None, stderr: str = None):
        super().__init__(message)
        self.key_path = key_path
        self.stderr = stderr
