#!/usr/bin/env python3
"""
Windows Reset Toolkit Maintenance Scheduler

This module registers a Windows scheduled task that purges old backups, so
retention is applied even when nobody runs the tool by hand.
"""

import os
import sys
from typing import Optional

from ResetToolkit.config_manager import get_config
from ResetToolkit.logger import get_module_logger
from system_helpers import is_admin, run_command

logger = get_module_logger('task_scheduler')

config = get_config()

TASK_NAME = config.get("maintenance.task_name", "WindowsResetToolkit Backup Cleanup")
DEFAULT_SCHEDULE = config.get("maintenance.schedule", "DAILY")
DEFAULT_START_TIME = config.get("maintenance.start_time", "03:00")
VALID_SCHEDULES = ("DAILY", "WEEKLY", "MONTHLY", "ONSTART", "ONLOGON")

BACKUP_TOOL_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backup_tool.py")

def build_cleanup_command(retention_days: int, backup_dir: Optional[str] = None) -> str:
    """
    Build the command line the scheduled task runs.

    The task runs as SYSTEM, where %LOCALAPPDATA% points at the system
    profile, so the directory is always resolved here and passed explicitly.

    Args:
        retention_days: Age limit passed to --older-than
        backup_dir: Backup directory to purge (default: configured one)

    Returns:
        str: Quoted command line for schtasks /TR
    """
    backup_dir = config.get_backup_dir(backup_dir)
    return (f'"{sys.executable}" "{BACKUP_TOOL_PATH}" --purge --older-than {int(retention_days)} --yes'
            f' --backup-dir "{backup_dir}"')

def check_cleanup_task_exists(task_name: str = TASK_NAME) -> bool:
    """
    Check if the cleanup task is registered.

    Args:
        task_name: Scheduled task name

    Returns:
        bool: True if the task exists, False otherwise
    """
    result = run_command(["schtasks", "/Query", "/TN", task_name])
    return result is not None and result.returncode == 0

def add_cleanup_task(retention_days: int,
                     schedule: str = DEFAULT_SCHEDULE,
                     start_time: str = DEFAULT_START_TIME,
                     backup_dir: Optional[str] = None,
                     task_name: str = TASK_NAME) -> bool:
    """
    Register (or replace) the scheduled backup cleanup task.

    The task runs as SYSTEM with highest privileges.

    Args:
        retention_days: Backups older than this are purged
        schedule: schtasks schedule type (DAILY, WEEKLY, ...)
        start_time: Start time as HH:MM
        backup_dir: Backup directory to purge
        task_name: Scheduled task name

    Returns:
        bool: True if successful, False otherwise
    """
    if not is_admin():
        logger.error("Administrative privileges required to schedule the cleanup task")
        return False

    schedule = schedule.upper()
    if schedule not in VALID_SCHEDULES:
        logger.error(f"Unsupported schedule '{schedule}', use one of: {', '.join(VALID_SCHEDULES)}")
        return False

    cmd = [
        "schtasks", "/Create",
        "/TN", task_name,
        "/TR", build_cleanup_command(retention_days, backup_dir),
        "/SC", schedule,
        "/RU", "SYSTEM",
        "/RL", "HIGHEST",
        "/F"
    ]
    # Event-triggered schedules take no start time
    if schedule not in ("ONSTART", "ONLOGON"):
        cmd[cmd.index("/RU"):cmd.index("/RU")] = ["/ST", start_time]

    result = run_command(cmd)
    if result is not None and result.returncode == 0:
        logger.info(f"Scheduled '{task_name}' ({schedule} {start_time}) to purge backups "
                    f"older than {retention_days} day(s)")
        return True

    error = (result.stderr or result.stdout).strip() if result is not None else "schtasks unavailable"
    logger.error(f"Failed to schedule cleanup task: {error}")
    return False

def remove_cleanup_task(task_name: str = TASK_NAME) -> bool:
    """
    Remove the scheduled backup cleanup task.

    Args:
        task_name: Scheduled task name

    Returns:
        bool: True if removed or not present, False otherwise
    """
    if not is_admin():
        logger.error("Administrative privileges required to remove the cleanup task")
        return False

    if not check_cleanup_task_exists(task_name):
        logger.info(f"Scheduled task '{task_name}' does not exist, nothing to remove")
        return True

    result = run_command(["schtasks", "/Delete", "/TN", task_name, "/F"])
    if result is not None and result.returncode == 0:
        logger.info(f"Removed scheduled task '{task_name}'")
        return True

    error = (result.stderr or result.stdout).strip() if result is not None else "schtasks unavailable"
    logger.error(f"Failed to remove scheduled task: {error}")
    return False
