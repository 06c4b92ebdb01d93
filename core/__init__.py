# core/__init__.py
"""
core - Lambda 인벤토리 CLI 인프라

아키텍처:
    core/
    ├── auth/           # 프로파일 기반 세션, 자격 증명 확인
    ├── parallel/       # 항목 단위 병렬 실행, 에러 수집, client 헬퍼
    ├── config.py       # 실행 설정, 버전
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.exceptions import ProviderError, is_access_denied
    from core.parallel import parallel_map
"""

from core import auth, config, exceptions, parallel

__all__: list[str] = [
    "auth",
    "parallel",
    "config",
    "exceptions",
]
