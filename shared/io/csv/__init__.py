"""CSV 출력 유틸리티.

Usage:
    from shared.io.csv import write_records

    written = write_records(records, "lambda-list.csv")
"""

from .writer import write_records

__all__: list[str] = ["write_records"]
