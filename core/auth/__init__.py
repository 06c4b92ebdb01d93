# core/auth/__init__.py
"""
AWS 인증 모듈 (core/auth)

단일 프로파일 기반 세션 생성과 자격 증명 확인을 제공합니다.

사용 예시:
    from core.auth import get_session, get_caller_identity

    session = get_session("default")
    identity = get_caller_identity(session)
"""

from .session import get_caller_identity, get_session

__all__ = [
    "get_session",
    "get_caller_identity",
]
