"""
core/parallel/client.py - boto3 client 생성 헬퍼

타임아웃과 연결 풀이 설정된 boto3 client를 생성합니다.
botocore 재시도는 꺼져 있습니다 (max_attempts=1).
실패한 호출은 호출 측의 에러 정책(치명 오류 또는 대체값)으로 처리됩니다.

Example:
    from core.parallel.client import get_client

    logs = get_client(session, "logs", max_pool_connections=workers)
    logs.describe_log_streams(logGroupName="/aws/lambda/my-fn", limit=1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    import boto3

# 재시도 없음
RETRIES = {"max_attempts": 1, "mode": "standard"}
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초
DEFAULT_MAX_POOL_CONNECTIONS = 25  # max_workers(20) 이상 권장


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """설정이 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (lambda, logs, sts 등)
        region_name: 리전 (None이면 세션 기본값)
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기 (워커 수 이상 권장)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries=dict(RETRIES),  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # boto3-stubs의 Literal 서비스명 요구를 우회
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
