# tests/cli/test_app.py
"""
cli/app.py 테스트 - CLI 엔트리포인트

Tests cover:
- 옵션 파싱과 기본값
- 성공 시 CSV 저장과 종료 코드 0
- 자격 증명/목록 조회/파일 생성 실패 시 종료 코드 1
- 일부 조회 실패는 종료 코드 0
"""

import csv
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from core.config import Settings
from core.exceptions import CredentialError, ProviderError
from core.parallel import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult
from shared.aws.lambda_ import NOT_FOUND

IDENTITY = {
    "Account": "123456789012",
    "Arn": "arn:aws:iam::123456789012:user/test-user",
    "UserId": "AIDATEST123",
}


def _fake_collect_last_invoked(failed_names=()):
    """레코드에 값을 채우는 collect_last_invoked 대체 함수"""

    def _collect(records, session=None, max_workers=20, on_complete=None, **kwargs):
        results = []
        for i, record in enumerate(records):
            if record.name in failed_names:
                record.last_invoked = NOT_FOUND
                error = TaskError(i, record.name, ErrorCategory.UNKNOWN, "RuntimeError", "boom")
                results.append(TaskResult(index=i, identifier=record.name, success=False, error=error))
            else:
                record.last_invoked = "2024-01-01T09:00:00+09:00"
                results.append(TaskResult(index=i, identifier=record.name, success=True, data=record.last_invoked))
            if on_complete:
                on_complete(results[-1].success)
        return ParallelExecutionResult(results=tuple(results))

    return _collect


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def patched_app(make_record):
    """AWS 호출 부분을 모킹한 cli.app"""
    session = MagicMock()
    session.region_name = "ap-northeast-2"

    with (
        patch("cli.app.get_session", return_value=session) as mock_get_session,
        patch("cli.app.get_caller_identity", return_value=IDENTITY),
        patch(
            "cli.app.collect_functions",
            return_value=[make_record("fn1"), make_record("fn2"), make_record("fn3")],
        ) as mock_collect,
        patch("cli.app.collect_last_invoked", side_effect=_fake_collect_last_invoked()) as mock_last_invoked,
    ):
        yield {
            "session": session,
            "get_session": mock_get_session,
            "collect_functions": mock_collect,
            "collect_last_invoked": mock_last_invoked,
        }


class TestCliOptions:
    """옵션 파싱 테스트"""

    def test_help(self, runner):
        """도움말에 모든 옵션 표시"""
        from cli.app import cli

        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for option in ("--show-debug-log", "--aws-profile", "--out-name", "--region", "--max-workers"):
            assert option in result.output

    def test_version(self, runner):
        """버전 표시"""
        from cli.app import VERSION, cli

        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert VERSION in result.output

    def test_invalid_max_workers(self, runner):
        """범위 밖의 워커 수는 사용법 오류"""
        from cli.app import cli

        result = runner.invoke(cli, ["--max-workers", "0"])

        assert result.exit_code == 2

    def test_empty_out_name(self, runner):
        """빈 출력 경로는 사용법 오류"""
        from cli.app import cli

        result = runner.invoke(cli, ["--out-name", ""])

        assert result.exit_code == 2

    def test_defaults_passed_to_run(self, runner):
        """기본 설정으로 run 호출"""
        from cli.app import cli

        with patch("cli.app.run", return_value=0) as mock_run:
            result = runner.invoke(cli, [])

        assert result.exit_code == 0
        settings = mock_run.call_args[0][0]
        assert settings == Settings()


class TestCliRun:
    """실행 흐름 테스트"""

    def test_success(self, runner, patched_app, tmp_path):
        """CSV 저장 후 종료 코드 0"""
        from cli.app import cli

        out = tmp_path / "lambdas.csv"

        result = runner.invoke(cli, ["--aws-profile", "prod", "--out-name", str(out), "--region", "us-east-1"])

        assert result.exit_code == 0, result.output
        patched_app["get_session"].assert_called_once_with("prod", "us-east-1")
        patched_app["collect_functions"].assert_called_once_with(patched_app["session"])
        with open(out, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 4
        assert [r[0] for r in rows[1:]] == ["fn1", "fn2", "fn3"]
        assert rows[1][6] == "2024-01-01T09:00:00+09:00"

    def test_max_workers_forwarded(self, runner, patched_app, tmp_path):
        """워커 수가 조회 단계에 전달"""
        from cli.app import cli

        result = runner.invoke(cli, ["--out-name", str(tmp_path / "o.csv"), "--max-workers", "5", "--show-debug-log"])

        assert result.exit_code == 0, result.output
        assert patched_app["collect_last_invoked"].call_args.kwargs["max_workers"] == 5

    def test_partial_failure_exit_zero(self, runner, patched_app, tmp_path):
        """일부 함수 조회 실패는 Not Found로 기록하고 종료 코드 0"""
        from cli.app import cli

        patched_app["collect_last_invoked"].side_effect = _fake_collect_last_invoked({"fn2"})
        out = tmp_path / "lambdas.csv"

        result = runner.invoke(cli, ["--out-name", str(out)])

        assert result.exit_code == 0, result.output
        with open(out, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[2][6] == NOT_FOUND

    def test_credential_error(self, runner, patched_app, tmp_path):
        """자격 증명 오류는 종료 코드 1, 파일 미생성"""
        from cli.app import cli

        patched_app["get_session"].side_effect = CredentialError("missing", "프로파일을 찾을 수 없습니다")
        out = tmp_path / "lambdas.csv"

        result = runner.invoke(cli, ["--aws-profile", "missing", "--out-name", str(out)])

        assert result.exit_code == 1
        assert not out.exists()
        patched_app["collect_functions"].assert_not_called()

    def test_list_error(self, runner, patched_app, tmp_path):
        """목록 조회 실패는 종료 코드 1, 파일 미생성"""
        from cli.app import cli

        patched_app["collect_functions"].side_effect = ProviderError(
            "lambda", "list_functions", error_code="AccessDeniedException"
        )
        out = tmp_path / "lambdas.csv"

        result = runner.invoke(cli, ["--out-name", str(out)])

        assert result.exit_code == 1
        assert not out.exists()
        patched_app["collect_last_invoked"].assert_not_called()

    def test_report_write_error(self, runner, patched_app, tmp_path):
        """출력 파일을 만들 수 없으면 종료 코드 1"""
        from cli.app import cli

        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")

        result = runner.invoke(cli, ["--out-name", str(blocker / "out.csv")])

        assert result.exit_code == 1

    def test_no_functions(self, runner, patched_app, tmp_path):
        """함수가 없으면 헤더만 있는 CSV"""
        from cli.app import cli

        patched_app["collect_functions"].return_value = []
        out = tmp_path / "lambdas.csv"

        result = runner.invoke(cli, ["--out-name", str(out)])

        assert result.exit_code == 0, result.output
        with open(out, newline="", encoding="utf-8") as f:
            assert len(list(csv.reader(f))) == 1


class TestMain:
    """main.py 엔트리포인트 테스트"""

    def test_main_delegates_to_cli(self):
        """main()은 cli()를 호출"""
        import main

        with patch("main.cli") as mock_cli:
            main.main()

        mock_cli.assert_called_once_with()
