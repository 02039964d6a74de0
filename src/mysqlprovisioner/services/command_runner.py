"""Subprocess execution service for mysqlprovisioner."""

import subprocess
from typing import List, Mapping, Optional

from mysqlprovisioner.errors import ClientUnavailableError, ProvisionerError
from mysqlprovisioner.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger):
        self.logger = logger

    def run(
        self,
        cmd: List[str],
        check: bool = False,
        capture_output: bool = True,
        input_text: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(
                cmd,
                text=True,
                input=input_text,
                capture_output=capture_output,
                env=dict(env) if env is not None else None,
            )
        except FileNotFoundError as exc:
            raise ClientUnavailableError(
                actionable_error("command_not_found", command=cmd[0])
            ) from exc
        except OSError as exc:
            raise ProvisionerError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"

        if check:
            raise ProvisionerError(message)

        self.logger.debug(message)
        return result
