"""
core/parallel/types.py - 병렬 실행 결과 타입

항목 단위 병렬 실행의 개별 결과(TaskResult)와 전체 결과
(ParallelExecutionResult)를 표현합니다.

각 결과는 입력 시퀀스에서의 위치(index)를 가지므로, 호출 측은
완료 순서와 무관하게 결과를 원래 항목에 되돌려 적용할 수 있습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """에러 카테고리 분류"""

    THROTTLING = "throttling"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    TIMEOUT = "timeout"
    EXPIRED_TOKEN = "expired_token"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    UNKNOWN = "unknown"


@dataclass
class TaskError:
    """개별 작업 실패 정보

    Attributes:
        index: 입력 시퀀스 내 위치
        identifier: 작업 식별자 (예: Lambda 함수 이름)
        category: 에러 카테고리
        error_code: AWS 에러 코드 또는 예외 클래스명
        message: 에러 메시지
        original_exception: 원본 예외 (traceback은 제거됨)
        timestamp: 실패 시각
    """

    index: int
    identifier: str
    category: ErrorCategory
    error_code: str
    message: str
    original_exception: Exception | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.identifier}] {self.error_code}: {self.message}"


@dataclass
class TaskResult(Generic[T]):
    """개별 작업 결과

    Attributes:
        index: 입력 시퀀스 내 위치
        identifier: 작업 식별자
        success: 성공 여부
        data: 작업 함수의 반환값 (실패 시 None)
        error: 실패 정보 (성공 시 None)
        duration_ms: 실행 시간 (밀리초)
    """

    index: int
    identifier: str
    success: bool
    data: T | None = None
    error: TaskError | None = None
    duration_ms: float = 0.0

    def __str__(self) -> str:
        status = "OK" if self.success else "FAIL"
        return f"[{self.identifier}] {status} ({self.duration_ms:.0f}ms)"


@dataclass
class ParallelExecutionResult(Generic[T]):
    """병렬 실행 전체 결과

    results는 항상 index 오름차순으로 정렬되어 보관됩니다.
    """

    results: tuple[TaskResult[T], ...] = ()

    def __post_init__(self) -> None:
        self.results = tuple(sorted(self.results, key=lambda r: r.index))

    @property
    def successful(self) -> list[TaskResult[T]]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[TaskResult[T]]:
        return [r for r in self.results if not r.success]

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def error_count(self) -> int:
        return len(self.failed)

    def has_any_failure(self) -> bool:
        return self.error_count > 0

    def get_data(self) -> list[T | None]:
        """index 순서대로 데이터 반환 (실패한 항목은 None)"""
        return [r.data if r.success else None for r in self.results]

    def get_errors(self) -> list[TaskError]:
        return [r.error for r in self.results if r.error is not None]

    def get_errors_by_category(self) -> dict[ErrorCategory, list[TaskError]]:
        """카테고리별 에러 그룹화"""
        by_category: dict[ErrorCategory, list[TaskError]] = {}
        for error in self.get_errors():
            by_category.setdefault(error.category, []).append(error)
        return by_category

    def get_error_summary(self, max_per_category: int = 3) -> str:
        """카테고리별 에러 요약 문자열

        Args:
            max_per_category: 카테고리별로 표시할 최대 식별자 수

        Returns:
            여러 줄의 요약 문자열 (실패가 없으면 빈 문자열)
        """
        errors = self.get_errors()
        if not errors:
            return ""

        lines = [f"총 {len(errors)}개 작업 실패"]
        for category, items in self.get_errors_by_category().items():
            names = ", ".join(e.identifier for e in items[:max_per_category])
            if len(items) > max_per_category:
                names += f" 외 {len(items) - max_per_category}개"
            lines.append(f"  [{category.value}] {len(items)}개: {names}")
        return "\n".join(lines)
