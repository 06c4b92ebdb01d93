"""
shared/aws/lambda_ - Lambda 공통 모듈

Lambda 함수 목록 수집과 마지막 호출 시각 조회
"""

from .collector import COLUMN_TITLES, FunctionRecord, collect_functions, get_column_titles
from .last_invoked import (
    LOG_GROUP_PREFIX,
    NOT_FOUND,
    collect_last_invoked,
    format_last_invoked,
    get_last_invoked,
    log_group_name,
)

__all__: list[str] = [
    # collector
    "FunctionRecord",
    "COLUMN_TITLES",
    "collect_functions",
    "get_column_titles",
    # last_invoked
    "LOG_GROUP_PREFIX",
    "NOT_FOUND",
    "collect_last_invoked",
    "format_last_invoked",
    "get_last_invoked",
    "log_group_name",
]
