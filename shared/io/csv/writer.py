"""
shared/io/csv/writer.py - Lambda 인벤토리 CSV 출력

헤더 행 하나와 레코드당 한 행을 원래 순서대로 기록합니다.
파일을 만들 수 없을 때만 ReportWriteError로 실패하고,
헤더/행 단위 기록 실패는 로그를 남기고 건너뜁니다.
"""

from __future__ import annotations

import csv
import logging
import os
from collections.abc import Sequence

from core.exceptions import ReportWriteError
from shared.aws.lambda_.collector import FunctionRecord, get_column_titles

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def write_records(records: Sequence[FunctionRecord], path: str) -> int:
    """레코드를 CSV 파일로 저장

    Args:
        records: 출력할 FunctionRecord 시퀀스
        path: 출력 파일 경로 (상위 디렉토리가 없으면 생성)

    Returns:
        기록된 데이터 행 수 (헤더 제외)

    Raises:
        ReportWriteError: 파일을 생성할 수 없는 경우
    """
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        f = open(path, "w", newline="", encoding=ENCODING)
    except OSError as e:
        raise ReportWriteError(path, "파일을 생성할 수 없습니다", cause=e) from e

    written = 0
    with f:
        writer = csv.writer(f)

        try:
            writer.writerow(get_column_titles())
        except (csv.Error, OSError, ValueError) as e:
            logger.error("헤더 행 기록 실패: %s", e)

        for record in records:
            try:
                writer.writerow(record.to_row())
            except (csv.Error, OSError, ValueError) as e:
                logger.error("행 기록 실패 [%s]: %s", record.name, e)
                continue
            written += 1

    logger.debug("CSV 저장: %s (%d행)", path, written)
    return written
