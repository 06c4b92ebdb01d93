# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
CLI 전용 콘솔 출력 및 로깅 설정
"""

from .console import (
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    configure_logging,
    console,
    get_console,
    get_progress,
    print_success,
    print_table,
    print_warning,
)

__all__ = [
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "configure_logging",
    "console",
    "get_console",
    "get_progress",
    "print_success",
    "print_table",
    "print_warning",
]
