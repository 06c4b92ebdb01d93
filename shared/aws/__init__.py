"""AWS 관련 공유 유틸리티.

하위 모듈:
- lambda_: Lambda 함수 목록 수집 및 마지막 호출 시각 조회
"""

from . import lambda_

__all__ = ["lambda_"]
