import os
from pathlib import Path
from typing import Optional, Union

from . import config
from .local_ip import get_local_ip
from .logger import info, trace
from .models import (
    ActionableError, LaunchConfiguration, LaunchResult, ProjectNotFoundError,
    SimulatorNotFoundError,
)
from .plist_buddy import BUNDLE_IDENTIFIER_KEY, PlistBuddy, ensure_debugger_settings
from .simulators import Simctl, matching_simulator, parse_simulators_list
from .xcode_project import build_xcode_project, find_xcode_project, xcodebuild_args


async def run_ios(
    simulator_name: Optional[str] = None,
    project_dir: Union[str, Path, None] = None,
    simctl: Optional[Simctl] = None,
) -> LaunchResult:
    """iOS 시뮬레이터에서 앱을 빌드하고 실행합니다.

    모든 단계는 동기적으로 실행되며 작업 디렉터리는 바꾸지 않습니다.
    프로젝트나 시뮬레이터를 찾지 못하면 즉시 중단하고, 이미 수행한 단계는
    되돌리지 않습니다.

    Args:
        simulator_name: 사용할 시뮬레이터 이름 (기본값: config.DEFAULT_SIMULATOR)
        project_dir: Xcode 프로젝트가 있는 디렉터리 (기본값: config.DEFAULT_PROJECT_PATH)
        simctl: 시뮬레이터 제어 객체
    """
    simulator_name = simulator_name or config.DEFAULT_SIMULATOR
    project_dir = Path(project_dir if project_dir is not None else config.DEFAULT_PROJECT_PATH)
    simctl = simctl or Simctl()

    if not project_dir.is_dir():
        raise ProjectNotFoundError(f"{project_dir} 폴더가 없습니다")

    project = find_xcode_project(sorted(os.listdir(project_dir)))
    scheme = project.scheme
    info(f"Xcode {project.kind} {project.name}을(를) 찾았습니다")

    simulators = parse_simulators_list(simctl.list_devices())
    simulator = matching_simulator(simulators, simulator_name)
    if simulator is None:
        raise SimulatorNotFoundError(simulator_name)
    if not simulator.is_available:
        trace(f"{simulator.name} ({simulator.udid})은(는) 사용할 수 없는 시뮬레이터입니다")

    info(f"{simulator.full_name} 실행 중...")
    simctl.boot(simulator)

    info(f'빌드 명령: "xcodebuild {" ".join(xcodebuild_args(project, scheme, simulator.udid))}"')
    build_xcode_project(project, scheme, simulator.udid, cwd=project_dir)

    launch = LaunchConfiguration(
        simulator=simulator,
        project=project,
        scheme=scheme,
        local_ip=get_local_ip(),
        project_dir=project_dir,
    )

    info(f"{launch.app_path} 설치 중")
    simctl.install(launch.app_path)

    plist = PlistBuddy(launch.plist_path)
    ensure_debugger_settings(plist, launch.local_ip)

    bundle_id = plist.print_value(BUNDLE_IDENTIFIER_KEY)
    if not bundle_id:
        raise ActionableError(f"{launch.plist_path}에 {BUNDLE_IDENTIFIER_KEY}가 없습니다")

    info(f"{bundle_id} 실행 중")
    simctl.launch(bundle_id)

    return LaunchResult(configuration=launch, bundle_id=bundle_id)
