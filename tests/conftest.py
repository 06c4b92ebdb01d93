"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_logs_client, make_record):
        record = make_record("fn1")
        pass
"""

import io
import os
import sys
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-2")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


@pytest.fixture
def local_tz(monkeypatch):
    """로컬 타임존 고정 (TZ 환경 변수 + time.tzset)

    Usage:
        def test_x(local_tz):
            local_tz("Asia/Seoul")
    """
    import time

    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available")

    def _set(tz: str) -> None:
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield _set

    monkeypatch.undo()
    time.tzset()


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "ap-northeast-2"
        mock_session.profile_name = "default"

        yield mock_session


@pytest.fixture
def mock_lambda_client():
    """Lambda 클라이언트 모킹 (list_functions 2페이지)"""
    mock_client = MagicMock()

    pages = [
        create_functions_page(["fn1", "fn2"]),
        create_functions_page(["fn3"]),
    ]
    mock_paginator = MagicMock()
    mock_paginator.paginate.return_value = pages
    mock_client.get_paginator.return_value = mock_paginator

    yield mock_client


@pytest.fixture
def mock_logs_client():
    """CloudWatch Logs 클라이언트 모킹 (스트림 없음)"""
    mock_client = MagicMock()
    mock_client.describe_log_streams.return_value = {"logStreams": []}
    yield mock_client


@pytest.fixture
def mock_sts_client():
    """STS 클라이언트 모킹"""
    mock_client = MagicMock()

    mock_client.get_caller_identity.return_value = {
        "UserId": "AIDATEST123",
        "Account": "123456789012",
        "Arn": "arn:aws:iam::123456789012:user/test-user",
    }

    yield mock_client


@pytest.fixture
def make_record():
    """FunctionRecord 생성 헬퍼"""
    from shared.aws.lambda_.collector import FunctionRecord

    def _make(name: str, **kwargs: Any) -> FunctionRecord:
        return FunctionRecord(
            name=name,
            arn=kwargs.pop("arn", f"arn:aws:lambda:ap-northeast-2:123456789012:function:{name}"),
            **kwargs,
        )

    return _make


# =============================================================================
# 유틸리티 함수
# =============================================================================


def create_function_config(name: str, **overrides: Any) -> Dict[str, Any]:
    """ListFunctions 응답의 FunctionConfiguration 생성 헬퍼"""
    config = {
        "FunctionName": name,
        "FunctionArn": f"arn:aws:lambda:ap-northeast-2:123456789012:function:{name}",
        "Description": f"{name} description",
        "LastModified": "2024-01-01T00:00:00.000+0000",
        "Role": "arn:aws:iam::123456789012:role/lambda-role",
        "Runtime": "python3.12",
    }
    config.update(overrides)
    return config


def create_functions_page(
    names: List[str],
    next_marker: Optional[str] = None,
) -> Dict[str, Any]:
    """list_functions 페이지 응답 생성 헬퍼"""
    page: Dict[str, Any] = {"Functions": [create_function_config(n) for n in names]}
    if next_marker:
        page["NextMarker"] = next_marker
    return page


def create_log_streams_response(last_event_timestamp: Optional[int]) -> Dict[str, Any]:
    """describe_log_streams 응답 생성 헬퍼"""
    stream: Dict[str, Any] = {"logStreamName": "2024/01/01/[$LATEST]abcdef"}
    if last_event_timestamp is not None:
        stream["lastEventTimestamp"] = last_event_timestamp
    return {"logStreams": [stream]}


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation,
    )


def create_lambda_zip() -> bytes:
    """Lambda 배포 패키지 (zip) 생성 헬퍼"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("handler.py", "def handler(event, context):\n    return event\n")
    return buffer.getvalue()


# =============================================================================
# moto 통합 (선택적)
# =============================================================================

try:
    import moto

    @pytest.fixture
    def aws_credentials(monkeypatch):
        """moto 사용 시 AWS 자격 증명 설정"""
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
        monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
        monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")

    @pytest.fixture
    def moto_session(aws_credentials):
        """moto를 사용한 boto3 Session"""
        with moto.mock_aws():
            import boto3

            yield boto3.Session(region_name="ap-northeast-2")

    @pytest.fixture
    def moto_lambda_role(moto_session):
        """Lambda 실행 역할 ARN"""
        import json

        iam = moto_session.client("iam")
        role = iam.create_role(
            RoleName="lambda-role",
            AssumeRolePolicyDocument=json.dumps(
                {
                    "Version": "2012-10-17",
                    "Statement": [
                        {
                            "Effect": "Allow",
                            "Principal": {"Service": "lambda.amazonaws.com"},
                            "Action": "sts:AssumeRole",
                        }
                    ],
                }
            ),
        )
        return role["Role"]["Arn"]

except ImportError:
    # moto가 설치되지 않은 경우 더미 픽스처
    @pytest.fixture
    def moto_session():
        pytest.skip("moto not installed")

    @pytest.fixture
    def moto_lambda_role():
        pytest.skip("moto not installed")
