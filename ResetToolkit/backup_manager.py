#!/usr/bin/env python3
"""
Windows Reset Toolkit Backup Manager

This module captures registry keys and files into timestamped backups before
a reset changes them, and puts them back on request. Each backup is a
directory (or a .zip archive of one) holding .reg exports, file copies and a
manifest with SHA-256 checksums.

Layout of a backup:

    <backup_dir>/<name>_<YYYYmmdd-HHMMSS>/
        manifest.json
        registry/001_HKLM_SOFTWARE_....reg
        files/001_hosts

Restores, deletes and purges take a lock file in <backup_dir>/.locks, so a
purge running in this or another process never removes a backup mid-restore.
"""

import datetime
import os
import re
import shutil
import tempfile
import zipfile
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ResetToolkit.config_manager import expand_path, get_config
from ResetToolkit.errors import (
    BackupError, BackupLockedError, BackupNotFoundError, ManifestError, RegistryError
)
from ResetToolkit.logger import get_module_logger
from ResetToolkit.manifest import (
    entry_target, file_checksum, manifest_entries, new_manifest, parse_created,
    read_manifest, stream_checksum, write_manifest
)
from ResetToolkit.registry_backend import RegExeBackend, normalize_key_path
from version import __version__

logger = get_module_logger('backup_manager')

LOCK_DIR_NAME = ".locks"
PARTIAL_SUFFIX = ".partial"
ARCHIVE_SUFFIX = ".zip"
SAFETY_PREFIX = "pre-restore-"

def create_timestamp(moment: Optional[datetime.datetime] = None) -> str:
    """Create a timestamp string for backup ids."""
    return (moment or datetime.datetime.now()).strftime("%Y%m%d-%H%M%S")

def safe_component(text: str, max_length: int = 80) -> str:
    """Turn a registry path or backup name into a file name component."""
    cleaned = re.sub(r'[^A-Za-z0-9._-]+', '_', text).strip('_.')
    return cleaned[:max_length] or "item"

def _unique(items: Iterable[str], key_func: Callable[[str], str] = str.lower) -> List[str]:
    seen = set()
    result = []
    for item in items:
        key = key_func(item)
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result

class Backup:
    """A backup on disk, described by its manifest."""

    def __init__(self, manifest: Dict[str, Any], location: str):
        self.manifest = manifest
        self.location = location

    @property
    def backup_id(self) -> str:
        return self.manifest["backup_id"]

    @property
    def name(self) -> str:
        return self.manifest["name"]

    @property
    def description(self) -> str:
        return self.manifest.get("description", "")

    @property
    def created(self) -> datetime.datetime:
        return parse_created(self.manifest)

    @property
    def registry_paths(self) -> List[str]:
        return [entry["path"] for entry in self.manifest["registry"]]

    @property
    def file_paths(self) -> List[str]:
        return [entry["source"] for entry in self.manifest["files"]]

    @property
    def skipped(self) -> List[Dict[str, str]]:
        return list(self.manifest.get("skipped", []))

    @property
    def compressed(self) -> bool:
        return self.location.lower().endswith(ARCHIVE_SUFFIX)

    def to_dict(self) -> Dict[str, Any]:
        """Summary used by the command line listing."""
        return {
            "backup_id": self.backup_id,
            "name": self.name,
            "description": self.description,
            "created": self.manifest["created"],
            "registry_keys": len(self.manifest["registry"]),
            "files": len(self.manifest["files"]),
            "skipped": len(self.skipped),
            "compressed": self.compressed,
            "location": self.location,
        }

    def __repr__(self):
        return f"Backup({self.backup_id!r}, location={self.location!r})"

class BackupManager:
    """
    Creates, lists, verifies, restores and purges backups under one directory.

    Settings not passed in come from the "backup" section of the configuration.
    """

    def __init__(self,
                 backup_dir: Optional[str] = None,
                 registry=None,
                 compress: Optional[bool] = None,
                 verify_on_restore: Optional[bool] = None,
                 rollback_on_failure: Optional[bool] = None,
                 retention_days: Optional[int] = None,
                 keep_latest: Optional[int] = None):
        """
        Initialize the backup manager.

        Args:
            backup_dir: Root directory holding backups
            registry: Registry backend (defaults to reg.exe)
            compress: Zip new backups by default
            verify_on_restore: Check checksums before restoring by default
            rollback_on_failure: Snapshot current state and undo a failed restore by default
            retention_days: Default age limit for purge
            keep_latest: Number of newest backups purge never removes
        """
        config = get_config()

        def setting(value, key, default):
            return config.get(f"backup.{key}", default) if value is None else value

        self.backup_dir = config.get_backup_dir(backup_dir)
        self.registry = registry or RegExeBackend(timeout=config.get("backup.registry_timeout", 30))
        self.compress = setting(compress, "compress", False)
        self.verify_on_restore = setting(verify_on_restore, "verify_on_restore", True)
        self.rollback_on_failure = setting(rollback_on_failure, "rollback_on_failure", True)
        self.retention_days = setting(retention_days, "retention_days", 30)
        self.keep_latest = setting(keep_latest, "keep_latest", 1)

        os.makedirs(self.backup_dir, exist_ok=True)
        self.lock_dir = os.path.join(self.backup_dir, LOCK_DIR_NAME)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _new_backup_id(self, name: str, created: datetime.datetime) -> str:
        base = f"{safe_component(name, 60)}_{create_timestamp(created)}"
        backup_id = base
        counter = 1
        while any(os.path.exists(os.path.join(self.backup_dir, backup_id + suffix))
                  for suffix in ("", ARCHIVE_SUFFIX, PARTIAL_SUFFIX, ARCHIVE_SUFFIX + PARTIAL_SUFFIX)):
            backup_id = f"{base}-{counter}"
            counter += 1
        return backup_id

    def _expand_file_paths(self, file_paths: Iterable[str],
                           skipped: List[Dict[str, str]]) -> List[str]:
        """Resolve file paths, expanding directories to the files beneath them."""
        resolved = []
        for path in _unique(file_paths, os.path.normcase):
            full_path = os.path.abspath(expand_path(path))
            if os.path.isdir(full_path):
                found = False
                for root, dirs, files in os.walk(full_path):
                    dirs.sort()
                    for filename in sorted(files):
                        resolved.append(os.path.join(root, filename))
                        found = True
                if not found:
                    skipped.append({"kind": "file", "path": full_path, "reason": "directory is empty"})
            elif os.path.isfile(full_path):
                resolved.append(full_path)
            else:
                skipped.append({"kind": "file", "path": full_path, "reason": "file not found"})
                logger.info(f"File {full_path} not found, nothing to back up")
        return _unique(resolved, os.path.normcase)

    def _capture_registry(self, registry_paths: Iterable[str], staging_dir: str,
                          manifest: Dict[str, Any]) -> None:
        os.makedirs(os.path.join(staging_dir, "registry"), exist_ok=True)
        normalized = _unique(normalize_key_path(path) for path in registry_paths)

        for key_path in normalized:
            if not self.registry.key_exists(key_path):
                manifest["skipped"].append({"kind": "registry", "path": key_path, "reason": "key not found"})
                logger.info(f"Registry key {key_path} not found, nothing to back up")
                continue

            index = len(manifest["registry"]) + 1
            relative = f"registry/{index:03d}_{safe_component(key_path)}.reg"
            dest = os.path.join(staging_dir, *relative.split('/'))
            self.registry.export_key(key_path, dest)

            manifest["registry"].append({
                "path": key_path,
                "file": relative,
                "sha256": file_checksum(dest),
                "size": os.path.getsize(dest),
            })
            logger.debug(f"Captured registry key {key_path}")

    def _capture_files(self, file_paths: Iterable[str], staging_dir: str,
                       manifest: Dict[str, Any]) -> None:
        os.makedirs(os.path.join(staging_dir, "files"), exist_ok=True)

        for source in self._expand_file_paths(file_paths, manifest["skipped"]):
            index = len(manifest["files"]) + 1
            relative = f"files/{index:03d}_{safe_component(os.path.basename(source))}"
            dest = os.path.join(staging_dir, *relative.split('/'))
            shutil.copy2(source, dest)

            manifest["files"].append({
                "source": source,
                "file": relative,
                "sha256": file_checksum(dest),
                "size": os.path.getsize(dest),
            })
            logger.debug(f"Captured file {source}")

    def _compress(self, staging_dir: str, backup_id: str) -> str:
        archive_path = os.path.join(self.backup_dir, backup_id + ARCHIVE_SUFFIX)
        partial_path = archive_path + PARTIAL_SUFFIX

        with zipfile.ZipFile(partial_path, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
            for root, dirs, files in os.walk(staging_dir):
                dirs.sort()
                for filename in sorted(files):
                    full_path = os.path.join(root, filename)
                    arcname = os.path.relpath(full_path, staging_dir).replace(os.sep, '/')
                    archive.write(full_path, arcname)

        os.replace(partial_path, archive_path)
        return archive_path

    def create(self,
               name: str,
               registry_paths: Optional[List[str]] = None,
               file_paths: Optional[List[str]] = None,
               description: Optional[str] = None,
               compress: Optional[bool] = None) -> Backup:
        """
        Back up registry keys and files.

        Keys and files that do not exist are recorded as skipped, not
        captured. If any export or copy fails the partial backup is removed.

        Args:
            name: Backup name
            registry_paths: Registry keys to export
            file_paths: Files or directories to copy
            description: Free text stored in the manifest
            compress: Zip the backup (defaults to the manager setting)

        Returns:
            Backup: The new backup

        Raises:
            BackupError: If nothing was requested or the backup failed
        """
        registry_paths = list(registry_paths or [])
        file_paths = list(file_paths or [])
        if not name or not name.strip():
            raise BackupError("A backup name is required")
        if not registry_paths and not file_paths:
            raise BackupError("Nothing to back up: no registry keys or files given")

        compress = self.compress if compress is None else compress
        created = datetime.datetime.now()
        backup_id = self._new_backup_id(name, created)
        staging_dir = os.path.join(self.backup_dir, backup_id + PARTIAL_SUFFIX)
        manifest = new_manifest(backup_id, name, created, __version__, description)

        logger.info(f"Creating backup {backup_id}...")
        try:
            os.makedirs(staging_dir)
            self._capture_registry(registry_paths, staging_dir, manifest)
            self._capture_files(file_paths, staging_dir, manifest)
            # The manifest goes in last; list() ignores anything without one
            write_manifest(staging_dir, manifest)

            if compress:
                location = self._compress(staging_dir, backup_id)
                shutil.rmtree(staging_dir)
            else:
                location = os.path.join(self.backup_dir, backup_id)
                os.replace(staging_dir, location)
        except (OSError, RegistryError, ValueError) as e:
            shutil.rmtree(staging_dir, ignore_errors=True)
            partial_archive = os.path.join(self.backup_dir, backup_id + ARCHIVE_SUFFIX + PARTIAL_SUFFIX)
            if os.path.exists(partial_archive):
                os.remove(partial_archive)
            logger.error(f"Backup {backup_id} failed: {e}")
            raise BackupError(f"Backup '{name}' failed: {e}")

        backup = Backup(manifest, location)
        logger.success(
            f"Backup {backup_id} created: {len(manifest['registry'])} registry key(s), "
            f"{len(manifest['files'])} file(s), {len(manifest['skipped'])} skipped"
        )
        return backup

    def run_protected(self,
                      name: str,
                      operation: Callable[[], Any],
                      registry_paths: Optional[List[str]] = None,
                      file_paths: Optional[List[str]] = None,
                      description: Optional[str] = None) -> Tuple[Backup, Any]:
        """
        Back up the given paths, then run an operation that changes them.

        The operation only starts once the backup is complete; if the backup
        fails, BackupError propagates and the operation never runs.

        Returns:
            Tuple of the backup and the operation's return value
        """
        backup = self.create(name, registry_paths, file_paths, description)
        logger.info(f"Backup {backup.backup_id} complete, running protected operation")
        return backup, operation()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def list(self) -> List[Backup]:
        """
        List all readable backups, newest first.

        Returns:
            List[Backup]: Backups found under the backup directory
        """
        backups = []
        for entry in sorted(os.listdir(self.backup_dir)):
            if entry.startswith('.') or entry.endswith(PARTIAL_SUFFIX):
                continue

            location = os.path.join(self.backup_dir, entry)
            if not (os.path.isdir(location) or entry.lower().endswith(ARCHIVE_SUFFIX)):
                continue

            try:
                backups.append(Backup(read_manifest(location), location))
            except ManifestError as e:
                logger.warning(f"Ignoring {location}: {e}")

        backups.sort(key=lambda b: (b.created, b.backup_id), reverse=True)
        return backups

    def get(self, name: str) -> Backup:
        """
        Find a backup by id, or the newest backup with the given name.

        Raises:
            BackupNotFoundError: If nothing matches
        """
        backups = self.list()
        for backup in backups:
            if backup.backup_id == name:
                return backup

        # list() is newest first
        for backup in backups:
            if backup.name == name:
                return backup

        raise BackupNotFoundError(f"No backup named '{name}' in {self.backup_dir}")

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def _artifact_failures(self, backup: Backup) -> List[Dict[str, str]]:
        """Compare every stored artifact with its manifest checksum."""
        failures = []
        entries = manifest_entries(backup.manifest)

        if backup.compressed:
            try:
                with zipfile.ZipFile(backup.location, 'r') as archive:
                    for entry in entries:
                        try:
                            with archive.open(entry["file"]) as member:
                                actual = stream_checksum(member)
                        except KeyError:
                            failures.append({"path": entry_target(entry), "error": "artifact missing"})
                            continue
                        if actual != entry["sha256"]:
                            failures.append({"path": entry_target(entry), "error": "checksum mismatch"})
            except (OSError, zipfile.BadZipFile) as e:
                return [{"path": backup.location, "error": f"cannot read archive: {e}"}]
            return failures

        for entry in entries:
            artifact = os.path.join(backup.location, *entry["file"].split('/'))
            if not os.path.isfile(artifact):
                failures.append({"path": entry_target(entry), "error": "artifact missing"})
            elif file_checksum(artifact) != entry["sha256"]:
                failures.append({"path": entry_target(entry), "error": "checksum mismatch"})
        return failures

    def verify(self, name: str) -> bool:
        """
        Check a backup's artifacts against its manifest checksums.

        Args:
            name: Backup id or name

        Returns:
            bool: True if every artifact is present and matches
        """
        backup = self.get(name)
        failures = self._artifact_failures(backup)

        for failure in failures:
            logger.error(f"{backup.backup_id}: {failure['path']}: {failure['error']}")

        if failures:
            logger.error(f"Backup {backup.backup_id} failed verification ({len(failures)} problem(s))")
            return False

        logger.success(f"Backup {backup.backup_id} verified")
        return True

    # ------------------------------------------------------------------
    # Restore
    # ------------------------------------------------------------------

    def _lock_path(self, backup_id: str) -> str:
        return os.path.join(self.lock_dir, f"{backup_id}.lock")

    def is_locked(self, backup_id: str) -> bool:
        """Check whether the backup's lock file is held."""
        return os.path.exists(self._lock_path(backup_id))

    def _acquire_lock(self, backup_id: str) -> None:
        os.makedirs(self.lock_dir, exist_ok=True)
        try:
            fd = os.open(self._lock_path(backup_id), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            raise BackupLockedError(f"Backup {backup_id} is in use by a restore or purge")
        with os.fdopen(fd, 'w') as f:
            f.write(f"{os.getpid()}\n")

    def _release_lock(self, backup_id: str) -> None:
        try:
            os.remove(self._lock_path(backup_id))
        except FileNotFoundError:
            pass

    def _materialize(self, backup: Backup) -> Tuple[str, Optional[str]]:
        """
        Get a directory holding the backup's artifacts.

        Returns:
            Tuple of the directory and a temporary directory to clean up, if any
        """
        if not backup.compressed:
            return backup.location, None

        work_dir = tempfile.mkdtemp(prefix="reset_toolkit_")
        real_work_dir = os.path.realpath(work_dir)
        try:
            with zipfile.ZipFile(backup.location, 'r') as archive:
                for member in archive.namelist():
                    target = os.path.realpath(os.path.join(work_dir, member))
                    if not target.startswith(real_work_dir + os.sep):
                        raise BackupError(f"Archive member escapes extraction directory: {member}")
                archive.extractall(work_dir)
        except (OSError, zipfile.BadZipFile, BackupError) as e:
            shutil.rmtree(work_dir, ignore_errors=True)
            raise BackupError(f"Cannot extract {backup.location}: {e}")
        return work_dir, work_dir

    def _apply(self, manifest: Dict[str, Any], source_dir: str,
               verify: bool) -> Tuple[List[str], List[Dict[str, str]]]:
        """Import every registry export and copy every file back."""
        restored = []
        failed = []

        for entry in manifest["registry"]:
            artifact = os.path.join(source_dir, *entry["file"].split('/'))
            try:
                self.registry.import_file(artifact)
                restored.append(entry["path"])
                logger.info(f"Restored registry key {entry['path']}")
            except (RegistryError, OSError) as e:
                failed.append({"path": entry["path"], "error": str(e)})
                logger.error(f"Failed to restore registry key {entry['path']}: {e}")

        for entry in manifest["files"]:
            artifact = os.path.join(source_dir, *entry["file"].split('/'))
            dest = entry["source"]
            try:
                if os.path.isdir(dest):
                    raise BackupError("a directory now exists at this path")
                os.makedirs(os.path.dirname(dest), exist_ok=True)
                shutil.copy2(artifact, dest)
                if verify and file_checksum(dest) != entry["sha256"]:
                    raise BackupError("restored copy does not match manifest checksum")
                restored.append(dest)
                logger.info(f"Restored file {dest}")
            except (OSError, BackupError) as e:
                failed.append({"path": dest, "error": str(e)})
                logger.error(f"Failed to restore file {dest}: {e}")

        return restored, failed

    def _roll_back(self, safety: Backup) -> bool:
        """Put back the state captured just before a failed restore."""
        logger.warning(f"Rolling back to state saved in {safety.backup_id}")

        # reg import merges, so values written by the failed restore have to
        # go before the saved export is imported again
        not_cleared = []
        for path in safety.registry_paths:
            try:
                self.registry.delete_key(path)
            except RegistryError as e:
                not_cleared.append({"path": path, "error": f"could not clear key: {e}"})
                logger.error(f"Failed to clear {path} during rollback: {e}")

        _, failed = self._apply(safety.manifest, safety.location, verify=False)
        failed.extend(not_cleared)

        # Anything that did not exist before the restore is removed again
        for item in safety.skipped:
            try:
                if item["kind"] == "registry":
                    if self.registry.key_exists(item["path"]):
                        self.registry.delete_key(item["path"])
                elif os.path.isfile(item["path"]):
                    os.remove(item["path"])
            except (RegistryError, OSError) as e:
                failed.append({"path": item["path"], "error": str(e)})
                logger.error(f"Failed to remove {item['path']} during rollback: {e}")

        if failed:
            logger.error(f"Rollback incomplete, {len(failed)} item(s) could not be reverted; "
                         f"state before the restore is kept in {safety.location}")
            return False

        logger.info("Rollback complete, system left as it was before the restore")
        return True

    def restore(self,
                name: str,
                verify: Optional[bool] = None,
                rollback_on_failure: Optional[bool] = None) -> Dict[str, Any]:
        """
        Restore a backup's registry keys and files.

        With verify, artifact checksums are checked first and nothing is
        applied on a mismatch. With rollback_on_failure, the current state of
        every path is backed up first and put back if any entry fails, so
        the restore applies all entries or none.

        Args:
            name: Backup id or name (a name picks its newest backup)
            verify: Check checksums (defaults to the manager setting)
            rollback_on_failure: Undo a failed restore (defaults to the manager setting)

        Returns:
            Dict with success, backup_id, restored, failed and rolled_back

        Raises:
            BackupNotFoundError: If no backup matches
            BackupLockedError: If the backup is held by another restore, delete or purge
            BackupError: If the backup cannot be read or the current state cannot be saved
        """
        verify = self.verify_on_restore if verify is None else verify
        rollback_on_failure = self.rollback_on_failure if rollback_on_failure is None else rollback_on_failure

        backup = self.get(name)
        result = {
            "success": False,
            "backup_id": backup.backup_id,
            "restored": [],
            "failed": [],
            "rolled_back": False,
        }

        if not backup.registry_paths and not backup.file_paths:
            logger.warning(f"Backup {backup.backup_id} captured nothing, there is nothing to restore")
            result["success"] = True
            return result

        self._acquire_lock(backup.backup_id)
        work_dir = None
        safety = None
        try:
            if verify:
                failures = self._artifact_failures(backup)
                if failures:
                    result["failed"] = failures
                    logger.error(f"Backup {backup.backup_id} failed verification, nothing was restored")
                    return result

            source_dir, work_dir = self._materialize(backup)

            if rollback_on_failure:
                try:
                    safety = self.create(
                        f"{SAFETY_PREFIX}{backup.name}",
                        registry_paths=backup.registry_paths,
                        file_paths=backup.file_paths,
                        description=f"State before restoring {backup.backup_id}",
                        compress=False,
                    )
                except BackupError as e:
                    raise BackupError(f"Could not save current state, nothing was restored: {e}")
                self._acquire_lock(safety.backup_id)

            logger.info(f"Restoring backup {backup.backup_id}...")
            result["restored"], result["failed"] = self._apply(backup.manifest, source_dir, verify)

            if result["failed"] and safety is not None:
                result["rolled_back"] = self._roll_back(safety)
                result["restored"] = []

            result["success"] = not result["failed"]
            if result["success"]:
                logger.success(f"Backup {backup.backup_id} restored ({len(result['restored'])} item(s))")
            else:
                logger.error(f"Restore of {backup.backup_id} failed for {len(result['failed'])} item(s)")
            return result
        finally:
            if safety is not None:
                self._release_lock(safety.backup_id)
            self._release_lock(backup.backup_id)
            if work_dir:
                shutil.rmtree(work_dir, ignore_errors=True)

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def _remove_location(self, location: str) -> bool:
        try:
            if os.path.isdir(location):
                shutil.rmtree(location)
            else:
                os.remove(location)
            return True
        except OSError as e:
            logger.error(f"Could not remove {location}: {e}")
            return False

    def delete(self, name: str) -> bool:
        """
        Delete one backup.

        Raises:
            BackupNotFoundError: If no backup matches
            BackupLockedError: If a restore holds the backup
        """
        backup = self.get(name)
        self._acquire_lock(backup.backup_id)
        try:
            if self._remove_location(backup.location):
                logger.info(f"Deleted backup {backup.backup_id}")
                return True
            return False
        finally:
            self._release_lock(backup.backup_id)

    def purge(self,
              older_than_days: Optional[int] = None,
              keep_latest: Optional[int] = None,
              now: Optional[datetime.datetime] = None) -> List[str]:
        """
        Delete backups older than the retention limit.

        Backups held by a restore and the keep_latest newest backups are
        never removed.

        Args:
            older_than_days: Age limit in days (defaults to the manager setting)
            keep_latest: Newest backups to keep regardless of age
            now: Reference time (defaults to the current time)

        Returns:
            List[str]: Ids of the removed backups
        """
        days = self.retention_days if older_than_days is None else older_than_days
        keep = self.keep_latest if keep_latest is None else keep_latest
        if days < 0:
            raise ValueError("older_than_days must not be negative")
        if keep < 0:
            raise ValueError("keep_latest must not be negative")

        cutoff = (now or datetime.datetime.now()) - datetime.timedelta(days=days)
        backups = self.list()
        protected = {backup.backup_id for backup in backups[:keep]}

        removed = []
        for backup in backups:
            if backup.created >= cutoff:
                continue
            if backup.backup_id in protected:
                logger.debug(f"Keeping {backup.backup_id}, one of the {keep} newest backups")
                continue
            # Holding the lock keeps a restore from starting on it mid-removal
            try:
                self._acquire_lock(backup.backup_id)
            except BackupLockedError:
                logger.info(f"Skipping {backup.backup_id}, a restore is in progress")
                continue

            try:
                if self._remove_location(backup.location):
                    removed.append(backup.backup_id)
                    logger.info(f"Purged backup {backup.backup_id} (created {backup.manifest['created']})")
            finally:
                self._release_lock(backup.backup_id)

        logger.info(f"Purge removed {len(removed)} backup(s) older than {days} day(s)")
        return removed
