"""
core/parallel/executor.py - 항목 단위 병렬 실행기

시퀀스의 각 항목에 대해 작업 함수를 병렬로 실행하고, 결과를
입력 위치(index)와 함께 수집합니다. ThreadPoolExecutor 기반이며
동시 실행 수는 max_workers로 제한됩니다.

워커는 공유 상태를 수정하지 않고 값만 반환합니다. 결과는 호출 스레드에서
as_completed로 수집되므로, 호출 측은 반환된 index로 원래 시퀀스에
단일 스레드로 결과를 적용할 수 있습니다.

주요 구성 요소:
- ParallelConfig: 병렬 실행 설정 (워커 수)
- ParallelItemExecutor: 항목 단위 병렬 실행기
- parallel_map: 간편한 병렬 실행 래퍼 함수

Example:
    from core.parallel import parallel_map

    result = parallel_map(lookup, records, max_workers=20, service="logs",
                          identifier=lambda r: r.name)
    for task in result.results:
        records[task.index].value = task.data if task.success else "N/A"
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TypeVar

from .errors import categorize_error, get_error_code
from .types import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS = 20
MAX_WORKERS_LIMIT = 100


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100)
    """

    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > MAX_WORKERS_LIMIT:
            self.max_workers = MAX_WORKERS_LIMIT


class ParallelItemExecutor:
    """항목 단위 병렬 실행기

    특징:
    - 항목당 하나의 작업, 동시 실행 수는 max_workers로 제한
    - 작업 실패는 해당 항목의 TaskResult로만 기록 (다른 작업에 영향 없음)
    - 모든 작업이 끝난 뒤에 반환 (join barrier)
    - 재시도 없음
    """

    def __init__(self, config: ParallelConfig | None = None):
        self.config = config or ParallelConfig()

    def execute(
        self,
        func: Callable[[T], R],
        items: Sequence[T],
        service: str = "default",
        identifier: Callable[[T], str] | None = None,
        on_complete: Callable[[bool], None] | None = None,
    ) -> ParallelExecutionResult[R]:
        """작업 함수를 모든 항목에 병렬 실행

        Args:
            func: item -> R 작업 함수
            items: 입력 항목 시퀀스
            service: 서비스 이름 (로깅용)
            identifier: 항목에서 식별자를 추출하는 함수 (None이면 str(index))
            on_complete: 작업 하나가 끝날 때마다 호출 측 스레드에서 호출되는
                콜백 (인자: 성공 여부). 진행률 표시용.

        Returns:
            ParallelExecutionResult[R]: index 순으로 정렬된 전체 실행 결과
        """
        if not items:
            logger.debug("실행할 작업이 없습니다 (service=%s)", service)
            return ParallelExecutionResult()

        workers = min(self.config.max_workers, len(items))
        logger.debug("병렬 실행 시작: %d개 작업, max_workers=%d, service=%s", len(items), workers, service)

        results: list[TaskResult[R]] = []
        start_time = time.monotonic()

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {}
            for index, item in enumerate(items):
                name = identifier(item) if identifier else str(index)
                future = executor.submit(self._execute_single, func, item, index, name)
                futures[future] = (index, name)

            for future in as_completed(futures):
                index, name = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    # _execute_single 밖에서 발생한 예상치 못한 executor 에러
                    logger.error("작업 실행 중 예외 [%s]: %s", name, e)
                    _clear_exception_chain(e)
                    result = TaskResult(
                        index=index,
                        identifier=name,
                        success=False,
                        error=TaskError(
                            index=index,
                            identifier=name,
                            category=ErrorCategory.UNKNOWN,
                            error_code="ExecutorError",
                            message=str(e),
                            original_exception=e,
                        ),
                    )

                results.append(result)
                if on_complete:
                    on_complete(result.success)

        total_time = (time.monotonic() - start_time) * 1000
        exec_result = ParallelExecutionResult(results=tuple(results))

        logger.debug(
            "병렬 실행 완료: 성공 %d, 실패 %d, 총 %.0fms",
            exec_result.success_count,
            exec_result.error_count,
            total_time,
        )

        return exec_result

    def _execute_single(
        self,
        func: Callable[[T], R],
        item: T,
        index: int,
        name: str,
    ) -> TaskResult[R]:
        """단일 작업 실행 (워커 스레드 내에서 호출)

        Args:
            func: 작업 함수
            item: 입력 항목
            index: 입력 시퀀스 내 위치
            name: 작업 식별자

        Returns:
            TaskResult[R]: 성공 시 데이터, 실패 시 에러 정보 포함
        """
        start_time = time.monotonic()

        try:
            data = func(item)
        except Exception as e:
            logger.debug("[%s] 작업 실패: %s", name, e)
            _clear_exception_chain(e)
            return TaskResult(
                index=index,
                identifier=name,
                success=False,
                error=TaskError(
                    index=index,
                    identifier=name,
                    category=categorize_error(e),
                    error_code=get_error_code(e),
                    message=str(e),
                    original_exception=e,
                ),
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        return TaskResult(
            index=index,
            identifier=name,
            success=True,
            data=data,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )


def parallel_map(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: int = DEFAULT_MAX_WORKERS,
    service: str = "default",
    identifier: Callable[[T], str] | None = None,
    on_complete: Callable[[bool], None] | None = None,
) -> ParallelExecutionResult[R]:
    """병렬 실행 편의 함수

    ParallelItemExecutor를 간단하게 사용할 수 있는 래퍼입니다.

    Args:
        func: item -> R 작업 함수
        items: 입력 항목 시퀀스
        max_workers: 최대 동시 스레드 수
        service: 서비스 이름 (로깅용)
        identifier: 항목 식별자 추출 함수
        on_complete: 작업 완료 콜백 (인자: 성공 여부)

    Returns:
        ParallelExecutionResult[R]
    """
    executor = ParallelItemExecutor(ParallelConfig(max_workers=max_workers))
    return executor.execute(func, items, service=service, identifier=identifier, on_complete=on_complete)
