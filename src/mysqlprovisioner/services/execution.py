"""Execution channels that run a SQL script against MySQL.

A channel hides whether the server is reached directly with the local
``mysql`` client or through ``docker exec`` inside a running container.
Channels report failures through :class:`ExecutionOutcome` and leave exit
handling to the caller.
"""

import os
from typing import Callable, List, Mapping, Optional

from mysqlprovisioner.constants import (
    CONTAINER_MYSQL_HOST,
    CONTAINER_PASSWORD_ENV,
    DOCKER_BINARY,
    MYSQL_CLIENT_BINARY,
)
from mysqlprovisioner.errors import ClientUnavailableError, ProvisionerError
from mysqlprovisioner.errors_catalog import (
    actionable_error,
    container_failure_checklist,
    direct_failure_checklist,
)
from mysqlprovisioner.models import (
    AdminCredentials,
    ContainerRef,
    ContainerTarget,
    DirectTarget,
    ExecutionOutcome,
    ExecutionTarget,
)


def resolve_target(
    admin: AdminCredentials,
    server_container: Optional[ContainerRef],
    client_available: bool,
    find_client_container: Callable[[], Optional[ContainerRef]],
) -> ExecutionTarget:
    """Chooses the single execution target for this run.

    A server container always wins, with the client addressing the server as
    ``localhost`` from inside it. Otherwise the local client is used when
    installed. Failing both, the client of another MySQL container is used to
    reach ``admin.host`` over the network.
    """
    if server_container is not None:
        return ContainerTarget(
            container=server_container,
            admin=admin,
            inner_host=CONTAINER_MYSQL_HOST,
            server_in_container=True,
        )

    if client_available:
        return DirectTarget(admin=admin)

    client_container = find_client_container()
    if client_container is None:
        raise ClientUnavailableError(actionable_error("client_unavailable"))

    return ContainerTarget(
        container=client_container,
        admin=admin,
        inner_host=admin.host,
        server_in_container=False,
    )


def _option_value(value: str) -> str:
    escaped = value.replace("\\", "\\\\")
    return f'"{escaped}"'


def build_client_options(admin: AdminCredentials) -> str:
    """Renders a ``[client]`` option file for ``--defaults-extra-file``."""
    lines = [
        "[client]",
        f"user={_option_value(admin.user)}",
        f"password={_option_value(admin.password)}",
        f"host={_option_value(admin.host)}",
    ]
    return "\n".join(lines) + "\n"


class ExecutionChannel:
    """Runs a SQL script against an execution target."""

    def __init__(self, logger, console, command_runner):
        self.logger = logger
        self.console = console
        self.command_runner = command_runner

    def execute(self, target: ExecutionTarget, script: str) -> ExecutionOutcome:
        raise NotImplementedError

    def _run_client(
        self,
        cmd: List[str],
        script: str,
        env: Optional[Mapping[str, str]] = None,
    ):
        try:
            result = self.command_runner.run(
                cmd,
                check=False,
                capture_output=True,
                input_text=script,
                env=env,
            )
        except ProvisionerError as exc:
            return False, str(exc)
        return result.returncode == 0, (result.stderr or "").strip()


class DirectChannel(ExecutionChannel):
    """Uses the local ``mysql`` client with a temporary option file."""

    OPTION_FILE_PREFIX = "mysql_creds."
    OPTION_FILE_SUFFIX = ".cnf"

    def __init__(self, logger, console, command_runner, filesystem_service):
        super().__init__(logger, console, command_runner)
        self.filesystem_service = filesystem_service

    def execute(self, target: ExecutionTarget, script: str) -> ExecutionOutcome:
        if not isinstance(target, DirectTarget):
            raise TypeError(f"DirectChannel cannot execute {type(target).__name__}")

        host = target.admin.host
        self.console.print(f"[blue]Attempting to connect to MySQL server at {host}...[/blue]")
        hints = direct_failure_checklist()
        summary = actionable_error("execution_failed_direct", host=host)

        try:
            with self.filesystem_service.private_temp_file(
                build_client_options(target.admin),
                prefix=self.OPTION_FILE_PREFIX,
                suffix=self.OPTION_FILE_SUFFIX,
            ) as options_path:
                success, diagnostic = self._run_client(
                    [
                        MYSQL_CLIENT_BINARY,
                        f"--defaults-extra-file={options_path}",
                        "--batch",
                    ],
                    script,
                )
        except OSError as exc:
            return ExecutionOutcome(
                success=False,
                diagnostic_log=f"Could not create temporary client option file: {exc}",
                hints=hints,
                summary=summary,
            )

        if success:
            return ExecutionOutcome(success=True, diagnostic_log=diagnostic)
        return ExecutionOutcome(
            success=False,
            diagnostic_log=diagnostic,
            hints=hints,
            summary=summary,
        )


class ContainerChannel(ExecutionChannel):
    """Pipes the script into the ``mysql`` client of a running container."""

    def __init__(self, logger, console, command_runner, locator, environ=None):
        super().__init__(logger, console, command_runner)
        self.locator = locator
        self.environ = environ if environ is not None else os.environ

    def build_command(self, target: ContainerTarget) -> List[str]:
        cmd = [DOCKER_BINARY, "exec", "-i"]
        if target.admin.password:
            # Without a value, docker copies the variable from its own environment.
            cmd += ["-e", CONTAINER_PASSWORD_ENV]
        cmd += [
            target.container.name,
            MYSQL_CLIENT_BINARY,
            f"-h{target.inner_host}",
            f"-u{target.admin.user}",
        ]
        return cmd

    def build_env(self, target: ContainerTarget) -> Optional[Mapping[str, str]]:
        if not target.admin.password:
            return None
        env = dict(self.environ)
        env[CONTAINER_PASSWORD_ENV] = target.admin.password
        return env

    def execute(self, target: ExecutionTarget, script: str) -> ExecutionOutcome:
        if not isinstance(target, ContainerTarget):
            raise TypeError(f"ContainerChannel cannot execute {type(target).__name__}")

        name = target.container.name
        if target.server_in_container:
            self.console.print(
                f"[blue]Attempting to connect to MySQL in Docker container: {name}...[/blue]"
            )
        else:
            self.console.print(
                f"[blue]Attempting to connect to MySQL server at {target.inner_host} "
                f"using Docker container: {name}...[/blue]"
            )

        if not self.locator.validate_running(target.container):
            return ExecutionOutcome(
                success=False,
                summary=actionable_error("container_not_running", name=name),
            )

        success, diagnostic = self._run_client(
            self.build_command(target),
            script,
            env=self.build_env(target),
        )
        if success:
            return ExecutionOutcome(success=True, diagnostic_log=diagnostic)

        remote_host = "" if target.server_in_container else target.inner_host
        return ExecutionOutcome(
            success=False,
            diagnostic_log=diagnostic,
            hints=container_failure_checklist(remote_host),
            summary=actionable_error("execution_failed_container", name=name),
        )


def channel_for(
    target: ExecutionTarget,
    logger,
    console,
    command_runner,
    filesystem_service,
    locator,
) -> ExecutionChannel:
    if isinstance(target, DirectTarget):
        return DirectChannel(logger, console, command_runner, filesystem_service)
    if isinstance(target, ContainerTarget):
        return ContainerChannel(logger, console, command_runner, locator)
    raise TypeError(f"Unknown execution target: {type(target).__name__}")
