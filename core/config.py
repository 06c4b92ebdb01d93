"""
core/config.py - 실행 설정

CLI 옵션 값을 담는 Settings와 버전 조회 함수를 제공합니다.

Usage:
    from core.config import Settings

    settings = Settings(aws_profile="prod", out_name="out/lambdas.csv")
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

from core.exceptions import InventoryError
from core.parallel.executor import DEFAULT_MAX_WORKERS, MAX_WORKERS_LIMIT

DISTRIBUTION_NAME = "lambda-list"

DEFAULT_PROFILE = "default"
DEFAULT_OUTPUT_NAME = "lambda-list.csv"


def get_version() -> str:
    """설치된 배포판의 버전 문자열 반환 (미설치 시 "0.0.0")"""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


@dataclass
class Settings:
    """실행 설정

    Attributes:
        show_debug_log: DEBUG 레벨 로그 출력 여부
        aws_profile: AWS 프로파일 이름
        out_name: 출력 CSV 파일 경로
        region: AWS 리전 (None이면 프로파일 설정값)
        max_workers: 로그 조회 동시 워커 수
    """

    show_debug_log: bool = False
    aws_profile: str = DEFAULT_PROFILE
    out_name: str = DEFAULT_OUTPUT_NAME
    region: str | None = None
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        if not self.aws_profile:
            raise InventoryError("aws_profile은 비어 있을 수 없습니다")
        if not self.out_name:
            raise InventoryError("out_name은 비어 있을 수 없습니다")
        if self.max_workers < 1:
            raise InventoryError(f"max_workers는 1 이상이어야 합니다: {self.max_workers}")
        if self.max_workers > MAX_WORKERS_LIMIT:
            self.max_workers = MAX_WORKERS_LIMIT
