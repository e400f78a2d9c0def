import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Optional


Availability = Literal["available", "unavailable"]

APP_PRODUCTS_DIR = Path("build") / "Build" / "Products" / "Debug-iphonesimulator"


def infer_scheme_name(project_name: str) -> str:
    """프로젝트 파일 이름에서 확장자를 뗀 스킴 이름을 반환합니다."""
    return os.path.splitext(os.path.basename(project_name))[0]


@dataclass
class SimulatorRecord:
    """시뮬레이터 목록의 한 줄"""
    name: str
    version: str
    udid: str
    availability: Availability = "available"
    runtime: str = ""
    state: Optional[str] = None

    @property
    def full_name(self) -> str:
        """instruments가 기대하는 "<이름> (<버전>)" 형식"""
        return f"{self.name} ({self.version})"

    @property
    def is_available(self) -> bool:
        return self.availability == "available"


@dataclass
class ProjectReference:
    """Xcode 프로젝트 또는 워크스페이스"""
    name: str
    is_workspace: bool

    @property
    def scheme(self) -> str:
        return infer_scheme_name(self.name)

    @property
    def kind(self) -> str:
        return "workspace" if self.is_workspace else "project"


@dataclass
class LaunchConfiguration:
    """한 번의 실행 동안만 유지되는 설정"""
    simulator: SimulatorRecord
    project: ProjectReference
    scheme: str
    local_ip: Optional[str]
    project_dir: Path

    @property
    def app_path(self) -> Path:
        return self.project_dir / APP_PRODUCTS_DIR / f"{self.scheme}.app"

    @property
    def plist_path(self) -> Path:
        return self.app_path / "Info.plist"


@dataclass
class LaunchResult:
    configuration: LaunchConfiguration
    bundle_id: str


class ActionableError(Exception):
    """사용자가 조치 가능한 오류"""
    pass


class ResolutionError(ActionableError):
    """프로젝트나 시뮬레이터를 찾지 못한 경우"""
    pass


class ProjectNotFoundError(ResolutionError):
    pass


class SimulatorNotFoundError(ResolutionError):
    def __init__(self, simulator_name: str):
        super().__init__(f"{simulator_name} 시뮬레이터를 찾을 수 없습니다")
        self.simulator_name = simulator_name


class SubprocessFailure(ActionableError):
    """외부 명령이 0이 아닌 종료 코드를 반환한 경우"""

    def __init__(self, command: List[str], returncode: int, output: str = ""):
        message = f"명령 실패 ({returncode}): {' '.join(command)}"
        if output:
            message += f"\n{output}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


class BuildFailedError(SubprocessFailure):
    pass
