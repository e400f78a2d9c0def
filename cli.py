import asyncio
import json
import os
import sys

import click

from run_ios import __version__, config
from run_ios.logger import error
from run_ios.models import ActionableError
from run_ios.runner import run_ios

JSON_ENV = os.environ.get("RUN_IOS_JSON", "0").lower() in ("1", "true")


def run_async(coro):
    return asyncio.run(coro)


def output_result(result, json_output: bool):
    if json_output:
        click.echo(json.dumps(result, ensure_ascii=False))
    else:
        click.echo(f"{result['bundle_id']} running on {result['simulator']} ({result['udid']})")


@click.command()
@click.option(
    "--simulator",
    default=config.DEFAULT_SIMULATOR,
    show_default=True,
    help="Explicitly set simulator to use",
)
@click.option(
    "--project-path",
    default=config.DEFAULT_PROJECT_PATH,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Folder containing the Xcode project or workspace",
)
@click.option("--json", "json_output", is_flag=True, help="Print the launch summary as JSON")
@click.version_option(__version__)
def cli(simulator, project_path, json_output):
    """Build the iOS app and start it on the simulator."""
    try:
        result = run_async(run_ios(simulator_name=simulator, project_dir=project_path))
    except ActionableError as e:
        error(str(e))
        sys.exit(1)

    launch = result.configuration
    output_result(
        {
            "bundle_id": result.bundle_id,
            "simulator": launch.simulator.full_name,
            "udid": launch.simulator.udid,
            "scheme": launch.scheme,
            "app_path": str(launch.app_path),
        },
        json_output or JSON_ENV,
    )


if __name__ == "__main__":
    cli()
