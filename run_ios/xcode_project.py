import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Union

from . import config
from .models import BuildFailedError, ProjectNotFoundError, ProjectReference


WORKSPACE_EXTENSION = ".xcworkspace"
PROJECT_EXTENSION = ".xcodeproj"

DERIVED_DATA_PATH = "build"


def find_xcode_project(files: Iterable[str]) -> ProjectReference:
    """디렉터리 목록에서 Xcode 워크스페이스 또는 프로젝트를 찾습니다.

    워크스페이스가 있으면 워크스페이스를, 없으면 프로젝트를 선택합니다.
    같은 종류가 여러 개면 목록에서 먼저 나온 것을 사용합니다.
    """
    project: Optional[str] = None

    for name in files:
        if name.endswith(WORKSPACE_EXTENSION):
            return ProjectReference(name=name, is_workspace=True)
        if project is None and name.endswith(PROJECT_EXTENSION):
            project = name

    if project is None:
        raise ProjectNotFoundError("Xcode 프로젝트 파일(.xcworkspace, .xcodeproj)을 찾을 수 없습니다")

    return ProjectReference(name=project, is_workspace=False)


def xcodebuild_args(project: ProjectReference, scheme: str, udid: str) -> List[str]:
    return [
        "-workspace" if project.is_workspace else "-project", project.name,
        "-scheme", scheme,
        "-destination", f"id={udid}",
        "-derivedDataPath", DERIVED_DATA_PATH,
    ]


def build_xcode_project(
    project: ProjectReference, scheme: str, udid: str, cwd: Union[str, Path]
) -> None:
    """xcodebuild를 실행합니다. 빌드 로그는 터미널에 그대로 출력됩니다."""
    cmd = [config.get_xcodebuild_path()] + xcodebuild_args(project, scheme, udid)

    result = subprocess.run(cmd, cwd=str(cwd))
    if result.returncode != 0:
        raise BuildFailedError(cmd, result.returncode)
