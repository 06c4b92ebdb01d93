"""
core/parallel - 병렬 처리 모듈

항목 단위 AWS 작업을 제한된 워커 풀에서 병렬로 안전하게 처리합니다.

주요 구성 요소:
- ParallelItemExecutor: 항목 단위 병렬 실행기 (결과는 index와 함께 반환)
- parallel_map: 간편한 병렬 실행 함수
- ErrorCollector: 스레드 세이프 에러 수집기
- get_client: 재시도 없는 boto3 client 생성

Example:
    from core.parallel import parallel_map

    def lookup(record):
        return logs.describe_log_streams(logGroupName=f"/aws/lambda/{record.name}", limit=1)

    result = parallel_map(lookup, records, max_workers=20, service="logs")
    print(f"성공: {result.success_count}, 실패: {result.error_count}")
"""

from .client import get_client
from .errors import (
    CollectedError,
    ErrorCollector,
    ErrorSeverity,
    categorize_error,
    get_error_code,
    try_or_default,
)
from .executor import ParallelConfig, ParallelItemExecutor, parallel_map
from .types import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

__all__: list[str] = [
    # Executor
    "ParallelItemExecutor",
    "ParallelConfig",
    "parallel_map",
    # Client
    "get_client",
    # Error handling
    "ErrorCollector",
    "ErrorSeverity",
    "CollectedError",
    "categorize_error",
    "get_error_code",
    "try_or_default",
    # Types
    "ErrorCategory",
    "TaskError",
    "TaskResult",
    "ParallelExecutionResult",
]
