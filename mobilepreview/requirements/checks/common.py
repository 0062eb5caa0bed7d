"""
Common Requirement Checks

Checks shared by every platform.
"""

from ...config.models import PreviewConfig
from ...errors import ExternalCommandError, RequirementUnmet
from ...simulator.runner import CommandRunner
from ..models import RequirementCheck


def server_plugin_check(runner: CommandRunner, config: PreviewConfig) -> RequirementCheck:
    """Check that the CLI plugin serving components is installed."""

    async def run() -> str:
        unfulfilled = (
            f"{config.server_plugin} is not installed. "
            f"Run: {config.sfdx_path} plugins:install {config.server_plugin}"
        )
        try:
            result = await runner.run(f"{config.sfdx_path} plugins --core")
        except ExternalCommandError:
            raise RequirementUnmet(unfulfilled)

        if config.server_plugin not in result.stdout:
            raise RequirementUnmet(unfulfilled)
        return f"{config.server_plugin} is installed"

    return RequirementCheck(title="Server Plugin", run=run)
