#!/usr/bin/env python3
"""
Windows Reset Toolkit Backup Tool

Command line front end for creating, restoring, verifying and purging the
registry and file backups taken before configuration resets.
"""

import argparse
import json
import sys
from typing import List, Optional, Tuple

from ResetToolkit.backup_manager import BackupManager
from ResetToolkit.config_manager import get_config
from ResetToolkit.errors import ResetToolkitError
from ResetToolkit.logger import configure_logging, get_module_logger
from ResetToolkit.prompts import confirm_destructive
from system_helpers import is_admin, run_as_admin
from task_scheduler import add_cleanup_task, remove_cleanup_task
from version import get_version_info, get_version_string

__version_info__ = get_version_info("backup_tool")
__version__ = __version_info__["version"]
__description__ = __version_info__["description"]

logger = get_module_logger('backup_tool')

def non_negative_int(value: str) -> int:
    """argparse type for day and count options."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a whole number")
    if number < 0:
        raise argparse.ArgumentTypeError(f"'{value}' must not be negative")
    return number

def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description=__description__)
    parser.add_argument('--version', action='version', version=get_version_string("backup_tool"))

    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("--create", metavar="NAME", help="Create a backup with the given name")
    action_group.add_argument("--restore", metavar="NAME", help="Restore a backup (id, or name for the newest)")
    action_group.add_argument("--list", action="store_true", help="List backups, newest first")
    action_group.add_argument("--verify", metavar="NAME", help="Check a backup against its manifest checksums")
    action_group.add_argument("--delete", metavar="NAME", help="Delete a backup")
    action_group.add_argument("--purge", action="store_true", help="Delete backups older than the retention limit")
    action_group.add_argument("--schedule-cleanup", action="store_true",
                              help="Register a scheduled task that purges old backups")
    action_group.add_argument("--remove-schedule", action="store_true", help="Remove the scheduled cleanup task")

    # What to back up
    parser.add_argument("--registry", action="append", default=[], metavar="KEY",
                        help="Registry key to back up (repeatable)")
    parser.add_argument("--file", action="append", default=[], metavar="PATH",
                        help="File or directory to back up (repeatable)")
    parser.add_argument("--set", action="append", default=[], dest="backup_sets", metavar="SET",
                        help="Named backup set from the configuration, e.g. network (repeatable)")
    parser.add_argument("--description", help="Description stored with the backup")
    parser.add_argument("--compress", action="store_true", help="Store the backup as a .zip archive")

    # Restore and retention options
    parser.add_argument("--no-verify", action="store_true", help="Skip checksum verification on restore")
    parser.add_argument("--no-rollback", action="store_true",
                        help="Do not snapshot and roll back the current state if a restore fails")
    parser.add_argument("--older-than", type=non_negative_int, metavar="DAYS",
                        help="Age limit for --purge and --schedule-cleanup (default: configured retention)")
    parser.add_argument("--keep-latest", type=non_negative_int, metavar="N",
                        help="Number of newest backups --purge always keeps")
    parser.add_argument("--schedule", help="Schedule type for --schedule-cleanup (DAILY, WEEKLY, ...)")
    parser.add_argument("--start-time", help="Start time for --schedule-cleanup (HH:MM)")

    # General options
    parser.add_argument("--backup-dir", help="Backup directory (default: configured directory)")
    parser.add_argument("--json", action="store_true", help="Print --list output as JSON")
    parser.add_argument("-y", "--yes", action="store_true", help="Quick mode (skip confirmations)")
    parser.add_argument("--no-elevate", action="store_true", help="Do not request administrative privileges")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (can be used multiple times)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Log file path (default: configured log file)")

    return parser

def collect_paths(args: argparse.Namespace) -> Tuple[List[str], List[str]]:
    """
    Combine --registry, --file and --set into the paths to back up.

    Raises:
        ResetToolkitError: If a backup set is not defined
    """
    config = get_config()
    registry_paths = list(args.registry)
    file_paths = list(args.file)

    for set_name in args.backup_sets:
        backup_set = config.get_backup_set(set_name)
        if backup_set is None:
            known = ", ".join(sorted(config.get("backup_sets", {}).keys()))
            raise ResetToolkitError(f"Unknown backup set '{set_name}' (known sets: {known})")
        registry_paths.extend(backup_set["registry"])
        file_paths.extend(backup_set["files"])

    return registry_paths, file_paths

def print_backups(backups, as_json: bool = False) -> None:
    """Print a backup listing."""
    if as_json:
        print(json.dumps([backup.to_dict() for backup in backups], indent=2))
        return

    if not backups:
        print("No backups found.")
        return

    print(f"\n{'Backup ID':<45} {'Created':<20} {'Keys':>5} {'Files':>6}  Type")
    print("-" * 86)
    for backup in backups:
        info = backup.to_dict()
        kind = "zip" if info["compressed"] else "dir"
        print(f"{info['backup_id']:<45} {info['created'].replace('T', ' '):<20} "
              f"{info['registry_keys']:>5} {info['files']:>6}  {kind}")
        if info["description"]:
            print(f"    {info['description']}")
    print(f"\n{len(backups)} backup(s)")

def print_restore_result(result: dict) -> None:
    """Print the outcome of a restore."""
    print(f"\nRestore of {result['backup_id']}: {'OK' if result['success'] else 'FAILED'}")
    for path in result["restored"]:
        print(f"  [OK]   {path}")
    for failure in result["failed"]:
        print(f"  [FAIL] {failure['path']}: {failure['error']}")
    if result["rolled_back"]:
        print("\nAll changes were rolled back; the system is as it was before the restore.")

def elevate_if_needed(args: argparse.Namespace, argv: List[str]) -> None:
    """Relaunch elevated on Windows when an action needs admin rights."""
    if sys.platform != "win32" or args.no_elevate or is_admin():
        return
    logger.info("Administrative privileges required, requesting elevation...")
    run_as_admin(sys.argv[0], *argv)

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(argv)
    config = get_config()

    if args.debug:
        verbosity = 2
    elif args.quiet:
        verbosity = 0
    else:
        verbosity = config.get("logging.verbosity", 1) + args.verbose
    configure_logging(
        verbosity,
        args.log_file or config.get("logging.log_file"),
        config.get("logging.max_size", 5242880),
        config.get("logging.backup_count", 3)
    )

    assume_yes = args.yes or config.get("prompts.assume_yes", False)

    try:
        if args.schedule_cleanup:
            elevate_if_needed(args, argv)
            days = args.older_than if args.older_than is not None else config.get("backup.retention_days", 30)
            success = add_cleanup_task(
                days,
                schedule=args.schedule or config.get("maintenance.schedule", "DAILY"),
                start_time=args.start_time or config.get("maintenance.start_time", "03:00"),
                backup_dir=config.get_backup_dir(args.backup_dir)
            )
            return 0 if success else 1

        if args.remove_schedule:
            elevate_if_needed(args, argv)
            return 0 if remove_cleanup_task() else 1

        manager = BackupManager(backup_dir=args.backup_dir)

        if args.create:
            registry_paths, file_paths = collect_paths(args)
            if not registry_paths and not file_paths:
                logger.error("Nothing to back up, use --registry, --file or --set")
                return 2
            backup = manager.create(
                args.create,
                registry_paths,
                file_paths,
                description=args.description,
                compress=True if args.compress else None
            )
            print(f"Created backup {backup.backup_id} at {backup.location}")
            for item in backup.skipped:
                print(f"  [SKIP] {item['path']}: {item['reason']}")
            return 0

        if args.list:
            print_backups(manager.list(), as_json=args.json)
            return 0

        if args.verify:
            return 0 if manager.verify(args.verify) else 1

        if args.restore:
            backup = manager.get(args.restore)
            if backup.registry_paths:
                elevate_if_needed(args, argv)
            if not confirm_destructive("overwrite the registry keys and files captured in",
                                       backup.backup_id, assume_yes):
                print("Restore cancelled.")
                return 1
            result = manager.restore(
                backup.backup_id,
                verify=False if args.no_verify else None,
                rollback_on_failure=False if args.no_rollback else None
            )
            print_restore_result(result)
            return 0 if result["success"] else 1

        if args.delete:
            backup = manager.get(args.delete)
            if not confirm_destructive("permanently delete backup", backup.backup_id, assume_yes):
                print("Delete cancelled.")
                return 1
            return 0 if manager.delete(backup.backup_id) else 1

        if args.purge:
            days = args.older_than if args.older_than is not None else manager.retention_days
            if not confirm_destructive(f"permanently delete backups older than {days} day(s) in",
                                       manager.backup_dir, assume_yes):
                print("Purge cancelled.")
                return 1
            removed = manager.purge(days, args.keep_latest)
            print(f"Removed {len(removed)} backup(s).")
            for backup_id in removed:
                print(f"  {backup_id}")
            return 0

    except ResetToolkitError as e:
        logger.error(str(e))
        return 1

    return 2

if __name__ == "__main__":
    sys.exit(main())
