import asyncio
import os
import tempfile
import unittest
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from run_ios.models import BuildFailedError, ProjectNotFoundError, SimulatorNotFoundError
from run_ios.runner import run_ios

DEVICES = """== Devices ==
-- iOS 13.7 --
    iPhone 11 (0D5C84C1-044C-4C03-B443-A1416DC1A296) (Shutdown)
-- iOS 14.0 --
    iPhone 11 (FB9D9985-8FD0-493D-9B09-58FD3AA4BE65) (Booted)
"""


class TestRunIOS(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.project_dir = Path(self.tmp.name) / "ios"
        (self.project_dir / "App.xcworkspace").mkdir(parents=True)
        (self.project_dir / "App.xcodeproj").mkdir()
        (self.project_dir / "Podfile").write_text("")

        self.simctl = MagicMock()
        self.simctl.list_devices.return_value = DEVICES

        self.plist = MagicMock()
        self.plist.print_value.side_effect = lambda key: {
            "CFBundleIdentifier": "org.reactjs.native.example.App",
        }.get(key)

    def tearDown(self):
        self.tmp.cleanup()

    def run_ios(self, simulator_name="iPhone 11"):
        with patch("run_ios.runner.build_xcode_project") as build, \
                patch("run_ios.runner.get_local_ip", return_value="192.168.1.10"), \
                patch("run_ios.runner.PlistBuddy", return_value=self.plist) as plist_cls, \
                patch("run_ios.runner.info") as info:
            result = asyncio.run(run_ios(simulator_name, self.project_dir, simctl=self.simctl))
        self.info = info
        return result, build, plist_cls

    def test_full_run(self):
        cwd = os.getcwd()
        result, build, plist_cls = self.run_ios()

        self.assertEqual(os.getcwd(), cwd)
        self.assertEqual(result.bundle_id, "org.reactjs.native.example.App")

        launch = result.configuration
        self.assertEqual(launch.scheme, "App")
        self.assertTrue(launch.project.is_workspace)
        self.assertEqual(launch.simulator.udid, "FB9D9985-8FD0-493D-9B09-58FD3AA4BE65")
        self.assertEqual(launch.local_ip, "192.168.1.10")

        self.simctl.boot.assert_called_once_with(launch.simulator)
        build.assert_called_once_with(
            launch.project, "App", "FB9D9985-8FD0-493D-9B09-58FD3AA4BE65", cwd=self.project_dir
        )

        app_path = self.project_dir / "build/Build/Products/Debug-iphonesimulator/App.app"
        self.assertEqual(launch.app_path, app_path)
        self.simctl.install.assert_called_once_with(app_path)
        plist_cls.assert_called_once_with(app_path / "Info.plist")
        self.plist.add_value.assert_any_call("RNDebuggerHostname", "string", "192.168.1.10")
        self.simctl.launch.assert_called_once_with("org.reactjs.native.example.App")

    def test_step_messages_in_order(self):
        result, _, _ = self.run_ios()
        app_path = result.configuration.app_path

        messages = [c[0][0] for c in self.info.call_args_list]
        self.assertEqual(messages, [
            "Xcode workspace App.xcworkspace을(를) 찾았습니다",
            "iPhone 11 (14.0) 실행 중...",
            '빌드 명령: "xcodebuild -workspace App.xcworkspace -scheme App '
            '-destination id=FB9D9985-8FD0-493D-9B09-58FD3AA4BE65 -derivedDataPath build"',
            f"{app_path} 설치 중",
            "org.reactjs.native.example.App 실행 중",
        ])

    def test_debugger_keys_patched_after_install(self):
        events = []
        self.simctl.install.side_effect = lambda path: events.append("install")
        self.plist.add_value.side_effect = lambda key, *args: events.append(key)
        self.simctl.launch.side_effect = lambda bundle_id: events.append("launch")

        self.run_ios()

        self.assertEqual(
            events, ["install", "RNDebuggerHostname", "RNDebuggerPort", "launch"]
        )

    def test_unavailable_simulator_is_traced(self):
        self.simctl.list_devices.return_value = DEVICES + (
            "-- Unavailable: com.apple.CoreSimulator.SimRuntime.iOS-12-1 --\n"
            "    iPhone 11 (28D40933-57F1-4B65-864F-1F6538B3ADF9) (Shutdown) "
            "(unavailable, runtime profile not found)\n"
        )
        with patch("run_ios.runner.trace") as trace:
            result, _, _ = self.run_ios()

        self.assertEqual(result.configuration.simulator.availability, "unavailable")
        trace.assert_called_once()
        self.assertIn("28D40933-57F1-4B65-864F-1F6538B3ADF9", trace.call_args[0][0])

    def test_available_simulator_is_not_traced(self):
        with patch("run_ios.runner.trace") as trace:
            self.run_ios()
        trace.assert_not_called()

    def test_simulator_not_found(self):
        with self.assertRaises(SimulatorNotFoundError) as ctx:
            self.run_ios("iPhone 6")
        self.assertEqual(ctx.exception.simulator_name, "iPhone 6")
        self.simctl.boot.assert_not_called()

    def test_project_not_found_before_any_subprocess(self):
        empty = Path(self.tmp.name) / "empty"
        empty.mkdir()
        with self.assertRaises(ProjectNotFoundError):
            asyncio.run(run_ios("iPhone 11", empty, simctl=self.simctl))
        with self.assertRaises(ProjectNotFoundError):
            asyncio.run(run_ios("iPhone 11", Path(self.tmp.name) / "missing", simctl=self.simctl))
        self.simctl.list_devices.assert_not_called()

    def test_build_failure_stops_run(self):
        with patch("run_ios.runner.build_xcode_project",
                   side_effect=BuildFailedError(["xcodebuild"], 65)), \
                patch("run_ios.runner.get_local_ip", return_value=None):
            with self.assertRaises(BuildFailedError):
                asyncio.run(run_ios("iPhone 11", self.project_dir, simctl=self.simctl))
        self.simctl.boot.assert_called_once()
        self.simctl.install.assert_not_called()


if __name__ == "__main__":
    unittest.main()
