"""
core/parallel/errors.py - 에러 분류 및 수집

병렬 실행 중 발생하는 에러를 일관되게 분류/수집하는 유틸리티입니다.

주요 구성 요소:
- ErrorSeverity: 에러 심각도 분류
- CollectedError: 수집된 에러 상세 정보
- ErrorCollector: 스레드 세이프 에러 수집기
- categorize_error / get_error_code: 예외 분류 헬퍼
- try_or_default: 실패 시 기본값 반환 헬퍼

Example:
    collector = ErrorCollector("logs")

    response = try_or_default(
        lambda: logs.describe_log_streams(logGroupName=name, limit=1),
        default=None,
        collector=collector,
        operation="describe_log_streams",
        resource_id=name,
    )

    if collector.has_errors:
        logger.info(collector.get_summary())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TypeVar

from botocore.exceptions import ClientError

from core.exceptions import is_access_denied, is_not_found, is_throttling

from .types import ErrorCategory

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorSeverity(Enum):
    """에러 심각도 분류

    수집된 에러의 심각도를 나타내며, 로깅 레벨을 결정합니다.
    """

    CRITICAL = "critical"  # 핵심 기능 실패
    WARNING = "warning"  # 부분 실패 - 보고하되 계속 진행
    INFO = "info"  # 정보성 (권한 없음 등)
    DEBUG = "debug"  # 예상된 실패 (로그 그룹 없음 등)


_LOG_LEVELS = {
    ErrorSeverity.CRITICAL: logging.ERROR,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.DEBUG: logging.DEBUG,
}


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        timestamp: 에러 발생 시각
        service: AWS 서비스 이름 (예: "lambda", "logs")
        operation: API 작업 이름 (예: "describe_log_streams")
        error_code: AWS 에러 코드 (예: "ResourceNotFoundException")
        error_message: 에러 메시지
        severity: 에러 심각도
        category: 에러 카테고리
        resource_id: 관련 리소스 ID (선택사항)
    """

    timestamp: datetime
    service: str
    operation: str
    error_code: str
    error_message: str
    severity: ErrorSeverity
    category: ErrorCategory
    resource_id: str | None = None

    def __str__(self) -> str:
        target = f" ({self.resource_id})" if self.resource_id else ""
        return f"[{self.severity.value.upper()}] {self.service}.{self.operation}{target}: {self.error_code}"


def categorize_error_code(error_code: str) -> ErrorCategory:
    """에러 코드 문자열을 기반으로 ErrorCategory 분류

    Args:
        error_code: AWS 에러 코드 문자열 (예: "AccessDenied", "ThrottlingException")

    Returns:
        분류된 에러 카테고리. 매칭되는 키워드가 없으면 UNKNOWN 반환.
    """
    code = error_code.lower()

    if any(x in code for x in ["accessdenied", "unauthorized", "forbidden"]):
        return ErrorCategory.ACCESS_DENIED
    if any(x in code for x in ["notfound", "nosuch", "doesnotexist"]):
        return ErrorCategory.NOT_FOUND
    if any(x in code for x in ["throttl", "ratelimit", "toomanyrequests"]):
        return ErrorCategory.THROTTLING
    if any(x in code for x in ["timeout", "timedout"]):
        return ErrorCategory.TIMEOUT
    if "expiredtoken" in code:
        return ErrorCategory.EXPIRED_TOKEN
    if any(x in code for x in ["invalid", "validation", "malformed"]):
        return ErrorCategory.INVALID_REQUEST
    if any(x in code for x in ["internal", "serviceunavailable", "serviceerror"]):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.UNKNOWN


def categorize_error(error: Exception) -> ErrorCategory:
    """예외 객체를 분석하여 ErrorCategory로 분류

    ClientError는 에러 코드로, 네트워크/타임아웃 에러는 타입으로 분류합니다.
    """
    if is_throttling(error):
        return ErrorCategory.THROTTLING
    if is_access_denied(error):
        return ErrorCategory.ACCESS_DENIED
    if is_not_found(error):
        return ErrorCategory.NOT_FOUND

    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return categorize_error_code(response.get("Error", {}).get("Code", ""))

    if isinstance(error, TimeoutError):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


def get_error_code(error: Exception) -> str:
    """예외 객체에서 에러 코드 문자열 추출

    ClientError의 경우 response에서 Code를 추출하고,
    그 외에는 예외 클래스명을 반환합니다.
    """
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        code: str = response.get("Error", {}).get("Code", "Unknown")
        return code
    return error.__class__.__name__


class ErrorCollector:
    """스레드 세이프 에러 수집기

    여러 워커 스레드에서 발생하는 에러를 안전하게 수집하고
    심각도별 요약을 제공합니다.
    """

    def __init__(self, service: str):
        """초기화

        Args:
            service: AWS 서비스 이름 (수집된 에러에 공통 적용)
        """
        self.service = service
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(
        self,
        error: ClientError,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        resource_id: str | None = None,
    ) -> None:
        """botocore ClientError를 수집하고 로깅

        ACCESS_DENIED는 WARNING 이상이면 INFO로 다운그레이드합니다.

        Args:
            error: botocore ClientError 예외
            operation: API 작업 이름
            severity: 에러 심각도 (기본: WARNING)
            resource_id: 관련 리소스 ID (선택사항)
        """
        error_info = error.response.get("Error", {})
        error_code = error_info.get("Code", "Unknown")
        error_message = error_info.get("Message", str(error))
        category = categorize_error_code(error_code)

        if category == ErrorCategory.ACCESS_DENIED and severity in (ErrorSeverity.CRITICAL, ErrorSeverity.WARNING):
            severity = ErrorSeverity.INFO

        self._add(operation, error_code, error_message, severity, category, resource_id)

    def collect_generic(
        self,
        error_code: str,
        error_message: str,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        resource_id: str | None = None,
    ) -> None:
        """일반 에러 수집 (ClientError 이외의 에러용)"""
        category = categorize_error_code(error_code)
        self._add(operation, error_code, error_message, severity, category, resource_id)

    def _add(
        self,
        operation: str,
        error_code: str,
        error_message: str,
        severity: ErrorSeverity,
        category: ErrorCategory,
        resource_id: str | None,
    ) -> None:
        collected = CollectedError(
            timestamp=datetime.now(),
            service=self.service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            severity=severity,
            category=category,
            resource_id=resource_id,
        )

        with self._lock:
            self._errors.append(collected)

        logger.log(_LOG_LEVELS[severity], "%s", collected)

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 모든 에러의 복사본 반환"""
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return len(self._errors) > 0

    def get_summary(self) -> str:
        """카테고리별 에러 건수를 포함한 요약 문자열 반환

        Returns:
            포맷팅된 요약 문자열 (예: "logs 에러 3건 (not_found: 2건, throttling: 1건)")
        """
        with self._lock:
            if not self._errors:
                return "에러 없음"

            by_category: dict[str, int] = {}
            for e in self._errors:
                by_category[e.category.value] = by_category.get(e.category.value, 0) + 1

        parts = [f"{k}: {v}건" for k, v in sorted(by_category.items())]
        return f"{self.service} 에러 {sum(by_category.values())}건 ({', '.join(parts)})"


def try_or_default(
    func: Callable[[], T],
    default: T,
    collector: ErrorCollector | None = None,
    operation: str = "",
    resource_id: str | None = None,
    severity: ErrorSeverity = ErrorSeverity.DEBUG,
) -> T:
    """함수 실행, 실패 시 기본값 반환 + 에러 수집

    부수적인 API 호출이 실패해도 전체 로직을 중단하지 않고
    기본값으로 대체하면서 에러를 수집합니다.

    Args:
        func: 실행할 함수 (인자 없음)
        default: 실패 시 반환할 기본값
        collector: ErrorCollector 인스턴스 (None이면 로깅만)
        operation: API 작업 이름
        resource_id: 관련 리소스 ID
        severity: 에러 심각도 (기본: DEBUG)

    Returns:
        함수 실행 결과 또는 실패 시 default 값
    """
    try:
        return func()
    except ClientError as e:
        if collector:
            collector.collect(e, operation, severity, resource_id)
        else:
            logger.log(_LOG_LEVELS[severity], "%s (%s): %s", operation, resource_id, get_error_code(e))
        return default
    except Exception as e:
        if collector:
            collector.collect_generic(get_error_code(e), str(e), operation, severity, resource_id)
        else:
            logger.log(_LOG_LEVELS[severity], "%s (%s): %s", operation, resource_id, e)
        return default
