import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from gdrivefetch import cli
from gdrivefetch.errors import AuthError
from gdrivefetch.models import FetchResult, RunResult


class FakeFetcher:
    instances = []
    result = None
    error = None

    def __init__(self, auth_info, **kwargs) -> None:
        self.auth_info = auth_info
        self.kwargs = kwargs
        self.run_calls = []
        FakeFetcher.instances.append(self)

    def run(self, base_dir, cache, **kwargs):
        self.run_calls.append((base_dir, cache.path, kwargs))
        if FakeFetcher.error is not None:
            raise FakeFetcher.error
        return FakeFetcher.result


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        FakeFetcher.instances = []
        FakeFetcher.error = None
        FakeFetcher.result = RunResult(
            status="success",
            stopped_file_id=None,
            results=[
                FetchResult(
                    file_id="f1",
                    resolved_path="/root/a.txt",
                    local_path="/data/root/a.txt",
                    status="skipped",
                    md5_checksum="abc",
                    reason="dry_run",
                )
            ],
            summary={"success": 0, "failed": 0, "skipped": 1},
            dry_run=True,
            missing_count=1,
        )

        patches = [
            patch.object(cli, "GoogleDriveFetcher", FakeFetcher),
            patch.object(cli, "setup_logging"),
            patch.dict("os.environ", {}, clear=True),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def test_build_config_flags_override_env(self) -> None:
        with patch.dict("os.environ", {"GDRIVEFETCH_DRY_RUN": "1", "GDRIVEFETCH_CACHE_FILE": "env.json"}):
            args = cli._parse_args(["/data", "--cache-file", "cli.json", "-v"])
            config = cli.build_config(args)

        self.assertEqual(config.cache_file, "cli.json")
        self.assertTrue(config.dry_run)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertFalse(config.refresh_remote)

    def test_main_dry_run_prints_report(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(["/data", "--dry-run", "--refresh-local", "--no-browser"])

        self.assertEqual(code, cli.EXIT_OK)
        fetcher = FakeFetcher.instances[0]
        self.assertFalse(fetcher.kwargs["open_browser"])
        base_dir, _, run_kwargs = fetcher.run_calls[0]
        self.assertEqual(base_dir, "/data")
        self.assertEqual(
            run_kwargs,
            {"dry_run": True, "refresh_remote": False, "refresh_local": True},
        )
        text = out.getvalue()
        self.assertEqual(
            text.splitlines()[:2],
            ["/root/a.txt (md5=abc)", "=> /data/root/a.txt [skipped: dry_run]"],
        )
        self.assertIn("1 remote files don't exist locally", text)
        self.assertIn("not processed: 0", text)

    def test_failed_run_reports_whole_missing_set(self) -> None:
        FakeFetcher.result = RunResult(
            status="failed",
            stopped_file_id="f1",
            results=[
                FetchResult(
                    file_id="f1",
                    resolved_path="/root/a.txt",
                    local_path="/data/root/a.txt",
                    status="failed",
                    md5_checksum="abc",
                    error_type="LocalWriteError",
                    error_message="Failed to write downloaded file",
                )
            ],
            summary={"success": 0, "failed": 1, "skipped": 0},
            missing_count=3,
        )
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(cli.main(["/data"]), cli.EXIT_FAILED)

        text = out.getvalue()
        self.assertIn("[failed: LocalWriteError: Failed to write downloaded file]", text)
        self.assertIn("3 remote files don't exist locally", text)
        self.assertIn("failed: 1, not processed: 2", text)

    def test_fatal_error_exit_code(self) -> None:
        FakeFetcher.error = AuthError("no token")
        with self.assertLogs("gdrivefetch.cli", level="ERROR"):
            self.assertEqual(cli.main(["/data"]), cli.EXIT_FATAL)


if __name__ == "__main__":
    unittest.main()
