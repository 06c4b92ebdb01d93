"""입출력 유틸리티.

하위 모듈:
- csv: CSV 리포트 출력
"""

from . import csv

__all__: list[str] = ["csv"]
