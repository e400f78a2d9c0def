import os


DEFAULT_SIMULATOR = os.environ.get("RUN_IOS_SIMULATOR", "iPhone 6")
DEFAULT_PROJECT_PATH = os.environ.get("RUN_IOS_PROJECT_PATH", "ios")

DEBUGGER_PORT = int(os.environ.get("RN_DEBUGGER_PORT", "8081"))

TIMEOUT = int(os.environ.get("SUBPROCESS_TIMEOUT", "30"))


def get_xcrun_path() -> str:
    """xcrun 실행 파일 경로를 반환합니다."""
    return os.environ.get("XCRUN_PATH", "xcrun")


def get_xcodebuild_path() -> str:
    """xcodebuild 실행 파일 경로를 반환합니다."""
    return os.environ.get("XCODEBUILD_PATH", "xcodebuild")


def get_plist_buddy_path() -> str:
    """PlistBuddy 실행 파일 경로를 반환합니다."""
    return os.environ.get("PLIST_BUDDY_PATH", "/usr/libexec/PlistBuddy")
