import subprocess
from pathlib import Path
from typing import List, Optional, Union

from . import config
from .logger import trace
from .models import SubprocessFailure


DEBUGGER_HOSTNAME_KEY = "RNDebuggerHostname"
DEBUGGER_PORT_KEY = "RNDebuggerPort"
BUNDLE_IDENTIFIER_KEY = "CFBundleIdentifier"


class PlistBuddy:
    """/usr/libexec/PlistBuddy 래퍼"""

    def __init__(self, plist_path: Union[str, Path]):
        self.plist_path = str(plist_path)

    def _command(self, command: str) -> List[str]:
        return [config.get_plist_buddy_path(), "-c", command, self.plist_path]

    def _execute(self, command: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            self._command(command),
            capture_output=True,
            text=True,
            timeout=config.TIMEOUT,
        )

    def print_value(self, key: str) -> Optional[str]:
        """키의 값을 읽습니다. 키가 없으면 None을 반환합니다."""
        command = f"Print:{key}"
        result = self._execute(command)

        if result.returncode != 0:
            output = (result.stdout + result.stderr).strip()
            if "Does Not Exist" in output:
                return None
            raise SubprocessFailure(
                self._command(command),
                result.returncode,
                output,
            )

        return result.stdout.strip() or None

    def add_value(self, key: str, value_type: str, value: object) -> None:
        """키를 추가합니다."""
        command = f"Add:{key} {value_type} {value}"
        result = self._execute(command)

        if result.returncode != 0:
            raise SubprocessFailure(
                self._command(command),
                result.returncode,
                (result.stdout + result.stderr).strip(),
            )


def ensure_debugger_settings(
    plist: PlistBuddy, local_ip: Optional[str], port: Optional[int] = None
) -> None:
    """디버거 호스트와 포트가 없을 때만 기본값을 추가합니다."""
    port = port if port is not None else config.DEBUGGER_PORT

    debugger_hostname = plist.print_value(DEBUGGER_HOSTNAME_KEY)
    debugger_port = plist.print_value(DEBUGGER_PORT_KEY)

    if not debugger_hostname:
        if local_ip:
            plist.add_value(DEBUGGER_HOSTNAME_KEY, "string", local_ip)
        else:
            trace(f"로컬 IP를 찾지 못해 {DEBUGGER_HOSTNAME_KEY}를 추가하지 않습니다")

    if not debugger_port:
        plist.add_value(DEBUGGER_PORT_KEY, "integer", port)
