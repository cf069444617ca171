#!/usr/bin/env python3
"""
Windows Reset Toolkit Confirmation Prompts
"""

from typing import Callable, Optional

from ResetToolkit.logger import get_module_logger

logger = get_module_logger('prompts')

def confirm(message: str,
            default: bool = False,
            assume_yes: bool = False,
            input_func: Optional[Callable[[str], str]] = None) -> bool:
    """
    Ask a Y/N question on the console.

    Args:
        message: Question to show
        default: Answer used when the user just presses Enter
        assume_yes: Skip the prompt and answer yes (quick mode)
        input_func: Function reading the answer (default: input)

    Returns:
        bool: True if the user confirmed
    """
    if assume_yes:
        logger.debug(f"Auto-confirmed: {message}")
        return True

    input_func = input_func or input
    suffix = "(Y/n)" if default else "(y/N)"
    while True:
        try:
            response = input_func(f"{message} {suffix}: ").strip().lower()
        except EOFError:
            # No console attached
            return False

        if not response:
            return default
        if response in ('y', 'yes'):
            return True
        if response in ('n', 'no'):
            return False
        print("Please answer 'y' or 'n'.")

def confirm_destructive(action: str,
                        target: str,
                        assume_yes: bool = False,
                        input_func: Optional[Callable[[str], str]] = None) -> bool:
    """Confirm an action that overwrites or removes something. Defaults to no."""
    return confirm(f"\nThis will {action} {target}. Continue?",
                   default=False, assume_yes=assume_yes, input_func=input_func)
