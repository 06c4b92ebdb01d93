"""
shared/aws/lambda_/last_invoked.py - Lambda 마지막 호출 시각 조회

각 함수의 로그 그룹(/aws/lambda/<함수명>)에서 마지막 이벤트가 가장 최근인
로그 스트림 하나를 조회하여 마지막 호출 시각으로 사용합니다.

조회는 함수별로 독립된 작업으로 병렬 실행됩니다. 작업은 문자열 값만
반환하고, 결과는 호출 스레드에서 index 기준으로 records에 적용됩니다.
조회 실패, 스트림 없음, 타임스탬프 없음은 모두 NOT_FOUND로 대체되며
다른 함수의 조회나 전체 실행을 중단시키지 않습니다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from core.parallel import (
    ErrorCollector,
    ErrorSeverity,
    ParallelExecutionResult,
    get_client,
    parallel_map,
    try_or_default,
)
from core.parallel.executor import DEFAULT_MAX_WORKERS

from .collector import FunctionRecord

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

LOG_GROUP_PREFIX = "/aws/lambda/"
NOT_FOUND = "Not Found"


def log_group_name(function_name: str) -> str:
    """함수 이름으로 로그 그룹 이름 생성"""
    return f"{LOG_GROUP_PREFIX}{function_name}"


def format_last_invoked(timestamp_ms: int) -> str:
    """밀리초 epoch 타임스탬프를 로컬 타임존 ISO-8601 문자열로 변환

    밀리초는 정수 나눗셈으로 버립니다.

    Example:
        format_last_invoked(1704067200999)  # TZ=UTC -> "2024-01-01T00:00:00+00:00"
    """
    seconds = int(timestamp_ms) // 1000
    return datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone().isoformat(timespec="seconds")


def get_last_invoked(
    logs_client: Any,
    function_name: str,
    collector: ErrorCollector | None = None,
) -> str:
    """함수 하나의 마지막 호출 시각 조회

    Args:
        logs_client: CloudWatch Logs client
        function_name: Lambda 함수 이름
        collector: 조회 실패를 모을 ErrorCollector (선택사항)

    Returns:
        로컬 타임존 ISO-8601 문자열 또는 NOT_FOUND
    """
    group = log_group_name(function_name)

    response = try_or_default(
        lambda: logs_client.describe_log_streams(
            logGroupName=group,
            orderBy="LastEventTime",
            descending=True,
            limit=1,
        ),
        default=None,
        collector=collector,
        operation="describe_log_streams",
        resource_id=group,
        severity=ErrorSeverity.DEBUG,
    )
    if response is None:
        return NOT_FOUND

    streams = response.get("logStreams") or []
    timestamp = streams[0].get("lastEventTimestamp") if streams else None
    if timestamp is None:
        logger.debug("마지막 호출 시각 없음: %s", function_name)
        return NOT_FOUND

    formatted = format_last_invoked(timestamp)
    logger.debug("마지막 호출 시각: %s -> %s (%d)", function_name, formatted, timestamp)
    return formatted


def collect_last_invoked(
    records: list[FunctionRecord],
    session: boto3.Session | None = None,
    logs_client: Any = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    collector: ErrorCollector | None = None,
    on_complete: Callable[[bool], None] | None = None,
) -> ParallelExecutionResult[str]:
    """모든 레코드의 last_invoked를 병렬로 채움

    모든 조회가 끝난 뒤에 반환하며, 반환 시점에 모든 레코드의
    last_invoked는 타임스탬프 또는 NOT_FOUND로 설정되어 있습니다.
    레코드를 추가/삭제/재정렬하지 않습니다.

    Args:
        records: FunctionRecord 리스트 (in-place 수정)
        session: boto3 Session (logs_client가 없을 때 client 생성용)
        logs_client: CloudWatch Logs client (스레드 간 공유)
        max_workers: 최대 동시 조회 수
        collector: 조회 실패 수집기 (None이면 내부 생성)
        on_complete: 조회 하나가 끝날 때마다 호출되는 콜백 (진행률 표시용)

    Returns:
        ParallelExecutionResult[str]: 작업별 결과
    """
    if logs_client is None:
        if session is None:
            raise ValueError("session 또는 logs_client 중 하나는 필요합니다")
        logs_client = get_client(session, "logs", max_pool_connections=max(max_workers, 10))

    collector = collector or ErrorCollector("logs")

    result = parallel_map(
        lambda record: get_last_invoked(logs_client, record.name, collector),
        records,
        max_workers=max_workers,
        service="logs",
        identifier=lambda record: record.name,
        on_complete=on_complete,
    )

    # 단일 스레드에서 index 기준으로 적용
    for task in result.results:
        records[task.index].last_invoked = task.data if task.success and task.data else NOT_FOUND

    found = sum(1 for r in records if r.last_invoked != NOT_FOUND)
    logger.debug("마지막 호출 시각 조회 완료: %d개 중 %d개 확인", len(records), found)

    if result.has_any_failure():
        logger.warning(result.get_error_summary())
    if collector.has_errors:
        logger.debug(collector.get_summary())

    return result
