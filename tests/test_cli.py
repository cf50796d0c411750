"""
Test cases for the command-line entry point.
"""
import asyncio
import io
import unittest
import sys
from pathlib import Path
from unittest import mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hud_pointer import cli as cli_module


def _interrupted(coro):
    """Stand-in for asyncio.run when Ctrl-C arrives mid-run."""
    coro.close()
    raise KeyboardInterrupt


class TestCli(unittest.TestCase):
    """Test exit codes reported by cli()."""

    def test_ctrl_c_exits_cleanly(self):
        """KeyboardInterrupt raised out of asyncio.run becomes exit code 130."""
        with mock.patch.object(cli_module.asyncio, "run", side_effect=_interrupted), \
                mock.patch("sys.stdout", new_callable=io.StringIO) as out:
            with self.assertRaises(SystemExit) as ctx:
                cli_module.cli([])
        self.assertEqual(ctx.exception.code, 130)
        self.assertIn("interrupted", out.getvalue())

    def test_exit_code_from_main(self):
        async def finished(argv=None):
            return 0

        with mock.patch.object(cli_module, "main", finished):
            with self.assertRaises(SystemExit) as ctx:
                cli_module.cli([])
        self.assertEqual(ctx.exception.code, 0)

    def test_missing_config_reports_error(self):
        """A bad config path fails before any window or camera is opened."""
        with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
            code = asyncio.run(cli_module.main(["--config", "/nonexistent/hud.yaml"]))
        self.assertEqual(code, 1)
        self.assertIn("Error", err.getvalue())

    def test_parse_args(self):
        args = cli_module.parse_args(["--no-camera", "--log-level", "DEBUG"])
        self.assertTrue(args.no_camera)
        self.assertEqual(args.log_level, "DEBUG")
        self.assertIsNone(args.config)


if __name__ == '__main__':
    unittest.main()
