"""Utility modules for xcleanup.

This module exports commonly used utility functions.
"""

from xcleanup.utils.formatting import (
    console,
    create_table,
    err_console,
    format_size,
    mode_label,
    print_error,
    print_info,
    print_path,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_table",
    "err_console",
    "format_size",
    "mode_label",
    "print_error",
    "print_info",
    "print_path",
    "print_success",
    "print_warning",
]
