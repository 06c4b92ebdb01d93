"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

실행 단계:
    1. 프로파일로 세션 생성 및 자격 증명 확인
    2. Lambda 함수 목록 수집
    3. 함수별 마지막 호출 시각 병렬 조회
    4. CSV 리포트 저장

종료 코드:
    0   성공 (일부 함수의 호출 시각 조회 실패, 행 기록 실패 포함)
    1   자격 증명 오류, 목록 조회 실패, 출력 파일 생성 실패

Usage:
    $ lambda-list
    $ lambda-list --aws-profile prod --out-name reports/prod-lambdas.csv
    $ lambda-list --show-debug-log --max-workers 5
"""

import logging

import click

from cli.ui import configure_logging, get_progress, print_success, print_table, print_warning
from core.auth import get_caller_identity, get_session
from core.config import DEFAULT_OUTPUT_NAME, DEFAULT_PROFILE, Settings, get_version
from core.exceptions import CredentialError, InventoryError, ProviderError, ReportWriteError
from core.parallel.executor import DEFAULT_MAX_WORKERS, MAX_WORKERS_LIMIT
from shared.aws.lambda_ import NOT_FOUND, collect_functions, collect_last_invoked
from shared.io.csv import write_records

logger = logging.getLogger(__name__)

VERSION = get_version()


def run(settings: Settings) -> int:
    """전체 실행 흐름

    Args:
        settings: 실행 설정

    Returns:
        프로세스 종료 코드
    """
    logger.debug("설정: %s", settings)

    try:
        session = get_session(settings.aws_profile, settings.region)
        identity = get_caller_identity(session)
    except CredentialError as e:
        logger.error("세션 생성 실패: %s", e)
        return 1

    logger.info("계정 %s (%s), 리전 %s", identity["Account"], identity["Arn"], session.region_name)

    logger.info("Lambda 함수 목록 조회 중")
    try:
        records = collect_functions(session)
    except ProviderError as e:
        logger.error("Lambda 함수 목록 조회 실패: %s", e)
        return 1
    logger.debug("Lambda 함수 %d개", len(records))

    logger.info("마지막 호출 시각 조회 중")
    if settings.show_debug_log or not records:
        result = collect_last_invoked(records, session=session, max_workers=settings.max_workers)
    else:
        with get_progress() as progress:
            task_id = progress.add_task("로그 스트림 조회", total=len(records))
            result = collect_last_invoked(
                records,
                session=session,
                max_workers=settings.max_workers,
                on_complete=lambda _success: progress.advance(task_id),
            )

    logger.info("결과 저장 중: %s", settings.out_name)
    try:
        written = write_records(records, settings.out_name)
    except ReportWriteError as e:
        logger.error("%s", e)
        return 1

    not_found = sum(1 for r in records if r.last_invoked == NOT_FOUND)
    print_table(
        "Lambda 마지막 호출 시각",
        ["항목", "값"],
        [
            ["함수", len(records)],
            ["호출 시각 확인", len(records) - not_found],
            [NOT_FOUND, not_found],
            ["출력 파일", settings.out_name],
        ],
    )
    if written < len(records):
        print_warning(f"{len(records) - written}개 행을 기록하지 못했습니다")
    if result.has_any_failure():
        print_warning(f"{result.error_count}개 함수의 조회 작업이 실패했습니다 ({NOT_FOUND} 처리)")

    print_success(f"{written}개 함수 정보를 {settings.out_name}에 저장했습니다")
    return 0


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, prog_name="lambda-list")
@click.option("--show-debug-log", is_flag=True, default=False, help="디버그 로그 출력")
@click.option("--aws-profile", default=DEFAULT_PROFILE, show_default=True, help="AWS 프로파일 이름")
@click.option("--out-name", default=DEFAULT_OUTPUT_NAME, show_default=True, help="출력 CSV 파일 경로")
@click.option("--region", default=None, help="AWS 리전 (기본: 프로파일 설정값)")
@click.option(
    "--max-workers",
    type=click.IntRange(1, MAX_WORKERS_LIMIT),
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="마지막 호출 시각 동시 조회 수",
)
def cli(
    show_debug_log: bool,
    aws_profile: str,
    out_name: str,
    region: str | None,
    max_workers: int,
) -> None:
    """Lambda 함수 목록과 마지막 호출 시각을 CSV로 저장합니다."""
    configure_logging(show_debug_log)

    try:
        settings = Settings(
            show_debug_log=show_debug_log,
            aws_profile=aws_profile,
            out_name=out_name,
            region=region,
            max_workers=max_workers,
        )
    except InventoryError as e:
        raise click.UsageError(str(e)) from e

    raise SystemExit(run(settings))


if __name__ == "__main__":
    cli()
