import io
import os
import tempfile
import unittest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from run_ios.logger import error, info, trace


class TestLogger(unittest.TestCase):
    def test_info_goes_to_stdout(self):
        with patch.dict(os.environ, {"LOG_FILE": ""}), \
                patch("sys.stdout", new_callable=io.StringIO) as stdout, \
                patch("sys.stderr", new_callable=io.StringIO) as stderr:
            info("App.xcworkspace을(를) 찾았습니다")

        self.assertEqual(stdout.getvalue(), "App.xcworkspace을(를) 찾았습니다\n")
        self.assertEqual(stderr.getvalue(), "")

    def test_trace_and_error_go_to_stderr(self):
        with patch.dict(os.environ, {"LOG_FILE": ""}), \
                patch("sys.stdout", new_callable=io.StringIO) as stdout, \
                patch("sys.stderr", new_callable=io.StringIO) as stderr:
            trace("instruments 종료 코드 255 무시")
            error("시뮬레이터를 찾을 수 없습니다")

        self.assertEqual(stdout.getvalue(), "")
        self.assertEqual(
            stderr.getvalue(),
            "instruments 종료 코드 255 무시\n시뮬레이터를 찾을 수 없습니다\n",
        )

    def test_log_file_records_level(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "run-ios.log")
            with patch.dict(os.environ, {"LOG_FILE": log_file}), \
                    patch("sys.stdout", new_callable=io.StringIO), \
                    patch("sys.stderr", new_callable=io.StringIO):
                info("설치 중")
                error("실패")

            with open(log_file, encoding="utf-8") as f:
                lines = f.read().splitlines()

        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].endswith("] INFO 설치 중"))
        self.assertTrue(lines[1].endswith("] ERROR 실패"))


if __name__ == "__main__":
    unittest.main()
