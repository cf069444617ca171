#!/usr/bin/env python3
"""
Windows System Helpers for the Windows Reset Toolkit

This module provides the privilege checks and tool invocation used by the
command line front end and the maintenance scheduler.
"""

import ctypes
import subprocess
import sys
from typing import List, Optional

from ResetToolkit.logger import get_module_logger

logger = get_module_logger('system_helpers')

TIMEOUT = 30  # seconds

def is_admin() -> bool:
    """
    Check if the current process has administrative privileges.

    Returns:
        bool: True if running with admin privileges, False otherwise
    """
    try:
        return ctypes.windll.shell32.IsUserAnAdmin() != 0
    except (AttributeError, OSError):
        # Not on Windows
        return False

def run_as_admin(script_path: str, *args) -> None:
    """
    Restart the current script with administrative privileges.

    Args:
        script_path: Path to the script to run
        *args: Additional arguments to pass
    """
    if is_admin():
        return

    logger.info("Requesting administrative privileges...")

    arg_list = [arg for arg in args if arg]
    if script_path.endswith('.py'):
        cmd = [sys.executable, script_path] + arg_list
    else:
        cmd = [script_path] + arg_list

    try:
        # Request elevation via ShellExecute
        ctypes.windll.shell32.ShellExecuteW(
            None, "runas", cmd[0], ' '.join(f'"{arg}"' for arg in cmd[1:]), None, 1
        )
        sys.exit(0)
    except (AttributeError, OSError) as e:
        logger.error(f"Failed to get admin privileges: {e}")
        sys.exit(1)

def run_command(cmd: List[str], timeout: int = TIMEOUT) -> Optional[subprocess.CompletedProcess]:
    """
    Run an external tool and capture its output.

    Args:
        cmd: Command and arguments
        timeout: Seconds to wait before giving up

    Returns:
        CompletedProcess, or None if the tool is missing or timed out
    """
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        return subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout} seconds: {' '.join(cmd)}")
    return None
