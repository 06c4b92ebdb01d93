"""
shared/aws/lambda_/collector.py - Lambda 함수 목록 수집

ListFunctions API를 끝까지 페이지네이션하며 함수당 하나의
FunctionRecord를 만듭니다. 한 페이지라도 실패하면 부분 결과 없이
ProviderError로 중단합니다 (재시도 없음).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import ProviderError
from core.parallel import get_client

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)


@dataclass
class FunctionRecord:
    """Lambda 함수 한 개의 리포트 행

    last_invoked는 빈 문자열로 시작하며 마지막 호출 시각 조회 단계에서만 채워집니다.
    """

    name: str
    arn: str
    description: str = ""
    last_modified: str = ""
    iam_role: str = ""
    runtime: str = ""
    last_invoked: str = ""

    @classmethod
    def from_api(cls, fn: dict[str, Any]) -> FunctionRecord:
        """ListFunctions 응답의 FunctionConfiguration에서 생성

        Description, Role, Runtime은 없을 수 있습니다 (컨테이너 이미지 함수는 Runtime 없음).

        Raises:
            KeyError: FunctionName 또는 FunctionArn이 없는 경우
        """
        return cls(
            name=fn["FunctionName"],
            arn=fn["FunctionArn"],
            description=fn.get("Description") or "",
            last_modified=fn.get("LastModified") or "",
            iam_role=fn.get("Role") or "",
            runtime=fn.get("Runtime") or "",
        )

    def to_row(self) -> list[str]:
        """COLUMN_TITLES 순서의 CSV 행 반환"""
        return [getattr(self, attr) for attr, _ in COLUMN_TITLES]


# 속성 -> CSV 컬럼 제목 (출력 순서)
COLUMN_TITLES: tuple[tuple[str, str], ...] = (
    ("name", "Function Name"),
    ("arn", "Function ARN"),
    ("description", "Function Description"),
    ("last_modified", "Last Modified"),
    ("iam_role", "IAM Role"),
    ("runtime", "Runtime"),
    ("last_invoked", "Last Invoked"),
)


def get_column_titles() -> list[str]:
    """CSV 헤더 행"""
    return [title for _, title in COLUMN_TITLES]


def collect_functions(session: boto3.Session | None = None, lambda_client: Any = None) -> list[FunctionRecord]:
    """계정/리전의 모든 Lambda 함수 수집

    Args:
        session: boto3 Session (lambda_client가 없을 때 client 생성용)
        lambda_client: 이미 생성된 Lambda client (테스트/재사용용)

    Returns:
        페이지 순서, 페이지 내 순서를 유지한 FunctionRecord 리스트

    Raises:
        ProviderError: API 호출 실패 또는 응답 형식 오류
    """
    if lambda_client is None:
        if session is None:
            raise ValueError("session 또는 lambda_client 중 하나는 필요합니다")
        lambda_client = get_client(session, "lambda")

    records: list[FunctionRecord] = []
    paginator = lambda_client.get_paginator("list_functions")

    try:
        for page_no, page in enumerate(paginator.paginate(), start=1):
            functions = page.get("Functions", [])
            logger.debug("list_functions 페이지 %d: %d개", page_no, len(functions))
            for fn in functions:
                records.append(FunctionRecord.from_api(fn))
    except ClientError as e:
        raise ProviderError.from_client_error("lambda", "list_functions", e) from e
    except BotoCoreError as e:
        raise ProviderError("lambda", "list_functions", error_message=str(e), cause=e) from e
    except KeyError as e:
        raise ProviderError(
            "lambda", "list_functions", error_code="MalformedResponse", error_message=f"필드 누락: {e}"
        ) from e

    logger.debug("Lambda 함수 %d개 수집 완료", len(records))
    return records
