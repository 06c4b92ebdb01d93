"""공유 유틸리티 - CLI에서 사용하는 AWS 수집 로직과 출력 로직.

- aws: AWS 리소스 수집 (Lambda 함수, 마지막 호출 시각)
- io: 입출력 (CSV 리포트)

의존성 구조:
    core (인프라)
       ↑
    shared (공유 유틸리티)
       ↑
    cli
"""

from . import aws, io

__all__ = ["aws", "io"]
