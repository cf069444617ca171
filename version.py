#!/usr/bin/env python3
"""
Windows Reset Toolkit Version Information

This module provides version information for all Windows Reset Toolkit components.
"""

# Version information
__version__ = "1.2.0"
__author__ = "Dustin Darcy"
__copyright__ = "Copyright 2025"

# Component descriptions
DESCRIPTIONS = {
    "backup_tool": "Windows Reset Toolkit Backup and Restore Tool",
    "backup_manager": "Windows Reset Toolkit Backup Manager",
    "task_scheduler": "Windows Reset Toolkit Maintenance Scheduler",
    "system_helpers": "Windows Reset Toolkit System Helpers",
}

def get_version_info(component=None):
    """
    Get version information for a specific component.

    Args:
        component: Component name (backup_tool, backup_manager, task_scheduler, system_helpers)

    Returns:
        Dict: Version information
    """
    info = {
        "version": __version__,
        "author": __author__,
        "copyright": __copyright__,
    }

    if component and component in DESCRIPTIONS:
        info["description"] = DESCRIPTIONS[component]
    else:
        info["description"] = "Windows Reset Toolkit"

    return info

def get_version_string(component=None):
    """
    Get formatted version string for a component.

    Args:
        component: Component name

    Returns:
        str: Formatted version string
    """
    info = get_version_info(component)
    return f"{info['description']} v{info['version']}"
