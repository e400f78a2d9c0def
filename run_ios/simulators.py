import re
import subprocess
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from . import config
from .logger import trace
from .models import SimulatorRecord, SubprocessFailure


SECTION_PATTERN = re.compile(r"^\s*--\s*(?P<title>.+?)\s*--\s*$")
RUNTIME_PATTERN = re.compile(r"^(?P<runtime>\w+)\s+(?P<version>\d+(?:\.\d+)*)$")

# "<이름> (<버전>) [<UDID>] (<상태>)" 또는 simctl의 "<이름> (<UDID>) (<상태>)"
# UDID에는 "-"가 최소 하나 있음. "iPad (A16)"의 "(A16)"은 이름의 일부
DEVICE_PATTERN = re.compile(
    r"^\s*(?P<name>\S.*?)"
    r"(?:\s+\((?P<version>\d+(?:\.\d+)*)\))?"
    r"\s+[\[(](?P<udid>[0-9A-Fa-f]+(?:-[0-9A-Fa-f]+)+)[\])]"
    r"(?P<annotations>(?:\s+\([^()]*\))*)"
    r"\s*$"
)
ANNOTATION_PATTERN = re.compile(r"\(([^()]*)\)")


class SimulatorList:
    """시뮬레이터 목록 텍스트를 지연 파싱하는 시퀀스

    매 반복마다 텍스트를 처음부터 다시 읽으므로 여러 번 순회할 수 있습니다.
    장치 형식에 맞지 않는 줄은 오류 없이 건너뜁니다.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[SimulatorRecord]:
        runtime = ""
        version = ""
        unavailable_section = False

        for line in self.text.splitlines():
            section = SECTION_PATTERN.match(line)
            if section:
                title = section.group("title")
                unavailable_section = title.lower().startswith("unavailable")
                header = RUNTIME_PATTERN.match(title)
                if header:
                    runtime = header.group("runtime")
                    version = header.group("version")
                else:
                    runtime = ""
                    version = ""
                continue

            device = DEVICE_PATTERN.match(line)
            if not device:
                continue

            annotations = [
                a.strip() for a in ANNOTATION_PATTERN.findall(device.group("annotations"))
            ]
            state = annotations[0] if annotations else None
            unavailable = unavailable_section or any(
                "unavailable" in a.lower() for a in annotations
            )
            yield SimulatorRecord(
                name=device.group("name"),
                version=version or device.group("version") or "",
                udid=device.group("udid"),
                availability="unavailable" if unavailable else "available",
                runtime=runtime,
                state=state,
            )

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __reversed__(self) -> Iterator[SimulatorRecord]:
        return reversed(list(self))


def parse_simulators_list(text: str) -> SimulatorList:
    """`xcrun simctl list devices` 출력을 파싱합니다."""
    return SimulatorList(text)


def matching_simulator(
    simulators: Iterable[SimulatorRecord], simulator_name: str
) -> Optional[SimulatorRecord]:
    """이름이 정확히 일치하는 시뮬레이터 중 목록에서 가장 뒤에 있는 것을 반환합니다.

    목록 뒤쪽이 보통 최신 OS 버전이므로 역순으로 찾습니다.
    """
    for simulator in reversed(list(simulators)):
        if simulator.name == simulator_name:
            return simulator
    return None


class Simctl:
    """xcrun simctl / instruments 래퍼"""

    def __init__(self, xcrun: Optional[str] = None):
        self.xcrun = xcrun or config.get_xcrun_path()

    def _simctl(self, *args: str) -> str:
        """simctl 명령을 실행하고 stdout을 반환합니다."""
        cmd = [self.xcrun, "simctl"] + list(args)

        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.TIMEOUT,
        )
        if result.returncode != 0:
            raise SubprocessFailure(cmd, result.returncode, result.stderr.strip())

        return result.stdout

    def _simctl_inherit(self, *args: str) -> None:
        """출력을 그대로 터미널에 보여주며 simctl 명령을 실행합니다."""
        cmd = [self.xcrun, "simctl"] + list(args)

        result = subprocess.run(cmd)
        if result.returncode != 0:
            raise SubprocessFailure(cmd, result.returncode)

    def list_devices(self) -> str:
        """시뮬레이터 목록 텍스트를 가져옵니다."""
        return self._simctl("list", "devices")

    def boot(self, simulator: SimulatorRecord) -> int:
        """시뮬레이터를 실행합니다.

        instruments는 인자가 부족하다며 항상 255로 끝나지만 시뮬레이터는
        정상적으로 뜨므로 종료 코드는 무시합니다.
        """
        result = subprocess.run(
            [self.xcrun, "instruments", "-w", simulator.full_name],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            trace(f"instruments 종료 코드 {result.returncode} 무시")
        return result.returncode

    def install(self, app_path: Union[str, Path]) -> None:
        """부팅된 시뮬레이터에 앱을 설치합니다."""
        self._simctl_inherit("install", "booted", str(app_path))

    def launch(self, bundle_id: str) -> None:
        """부팅된 시뮬레이터에서 앱을 실행합니다."""
        self._simctl_inherit("launch", "booted", bundle_id)
