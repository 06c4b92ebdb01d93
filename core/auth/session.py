"""
core/auth/session.py - 프로파일 기반 boto3 세션

공유 config/credentials 파일에 정의된 프로파일로 boto3 Session을 만들고
자격 증명이 실제로 해석되는지 확인합니다. 어떤 실패든 CredentialError로
변환되며, CLI에서는 치명 오류로 처리됩니다.

Usage:
    from core.auth.session import get_caller_identity, get_session

    session = get_session("default", region="ap-northeast-2")
    identity = get_caller_identity(session)
    print(identity["Account"])
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from core.config import DEFAULT_PROFILE
from core.exceptions import CredentialError, format_error_for_user
from core.parallel.client import get_client

logger = logging.getLogger(__name__)


def _create_session(profile_name: str, region: str | None) -> boto3.Session:
    """boto3 Session 생성

    default 프로파일이 공유 설정 파일에 없으면 프로파일 없이 생성하여
    환경 변수, 컨테이너, 인스턴스 메타데이터 자격 증명 체인을 사용합니다.
    """
    try:
        return boto3.Session(profile_name=profile_name, region_name=region)
    except ProfileNotFound as e:
        if profile_name != DEFAULT_PROFILE:
            raise CredentialError(profile_name, "프로파일을 찾을 수 없습니다", cause=e) from e
        logger.debug("default 프로파일 없음, 기본 자격 증명 체인 사용")

    return boto3.Session(region_name=region)


def get_session(profile_name: str, region: str | None = None) -> boto3.Session:
    """프로파일로 boto3 Session 생성

    Args:
        profile_name: AWS 프로파일 이름 (~/.aws/config, ~/.aws/credentials)
        region: 리전 (None이면 프로파일 설정값 사용)

    Returns:
        boto3.Session

    Raises:
        CredentialError: 프로파일이 없거나 자격 증명을 찾을 수 없는 경우
    """
    logger.debug("세션 생성: profile=%s, region=%s", profile_name, region)

    try:
        session = _create_session(profile_name, region)
    except BotoCoreError as e:
        raise CredentialError(profile_name, "세션 생성 실패", cause=e) from e

    try:
        credentials = session.get_credentials()
    except BotoCoreError as e:
        raise CredentialError(profile_name, "자격 증명을 해석할 수 없습니다", cause=e) from e

    if credentials is None:
        raise CredentialError(profile_name, "자격 증명이 설정되지 않았습니다")

    if not session.region_name:
        raise CredentialError(profile_name, "리전이 설정되지 않았습니다 (--region 또는 프로파일 region 필요)")

    return session


def get_caller_identity(session: boto3.Session) -> dict[str, Any]:
    """STS GetCallerIdentity로 자격 증명 유효성 확인

    Args:
        session: boto3 Session

    Returns:
        {"Account": ..., "Arn": ..., "UserId": ...}

    Raises:
        CredentialError: 자격 증명이 유효하지 않은 경우
    """
    profile = session.profile_name or "default"
    sts = get_client(session, "sts")

    try:
        response = sts.get_caller_identity()
    except ClientError as e:
        raise CredentialError(profile, format_error_for_user(e), cause=e) from e
    except BotoCoreError as e:
        raise CredentialError(profile, "STS 호출 실패", cause=e) from e

    return {
        "Account": response.get("Account", ""),
        "Arn": response.get("Arn", ""),
        "UserId": response.get("UserId", ""),
    }
