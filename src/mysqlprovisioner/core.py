import logging
import shutil
import signal
from contextlib import contextmanager
from typing import Callable, Mapping, Optional

from rich.console import Console

from .constants import DEFAULT_ENV_FILE, DEFAULT_OUTPUT_DIR, MYSQL_CLIENT_BINARY
from .errors import ProvisionerError
from .models import (
    AdminCredentials,
    ContainerRef,
    Environment,
    ExecutionOutcome,
    ExecutionTarget,
    ProvisioningRequest,
    ProvisioningStage,
)
from .services.command_runner import CommandRunner
from .services.config_loader import EnvironmentSettingsLoader
from .services.credential_store import CredentialStore
from .services.credentials import CredentialResolver
from .services.docker_runtime import ContainerLocator
from .services.execution import channel_for, resolve_target
from .services.filesystem import FileSystemService
from .services.prompts import PromptService
from .services.sql_script import build_provisioning_script

console = Console()
logger = logging.getLogger("mysqlprovisioner")


class MySQLProvisioner:
    """Creates a database and an application user, then stores its credentials."""

    TERMINATION_SIGNALS = tuple(
        getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
    )

    def __init__(
        self,
        environment: Optional[str] = None,
        container: Optional[str] = None,
        env_file: Optional[str] = DEFAULT_ENV_FILE,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        settings: Optional[Mapping[str, str]] = None,
        prompt_service: Optional[PromptService] = None,
        command_runner: Optional[CommandRunner] = None,
        which: Optional[Callable] = None,
    ):
        self.environment = self._parse_environment(environment) if environment else None
        self.container = ContainerRef(container) if container else None
        self.env_file = env_file
        self.output_dir = output_dir
        self.settings = settings
        self.which = which or shutil.which
        self.stage = ProvisioningStage.COLLECTING_INPUTS

        self.filesystem_service = FileSystemService(logger=logger, console=console)
        self.command_runner = command_runner or CommandRunner(logger=logger)
        self.prompt_service = prompt_service or PromptService(console=console)
        self.settings_loader = EnvironmentSettingsLoader(logger=logger)
        self.credential_resolver = CredentialResolver(logger=logger)
        self.locator = ContainerLocator(
            logger=logger,
            command_runner=self.command_runner,
            which=self.which,
        )
        self.credential_store = CredentialStore(
            output_dir=self.output_dir,
            filesystem_service=self.filesystem_service,
            logger=logger,
        )

    @staticmethod
    def _parse_environment(value: str) -> Environment:
        try:
            return Environment.parse(value)
        except ValueError as exc:
            raise ProvisionerError(f"{exc}. Please enter local, dev, or prod.") from exc

    def _set_stage(self, stage: ProvisioningStage):
        logger.debug("Stage: %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    @contextmanager
    def _terminate_as_interrupt(self):
        """Turns SIGTERM/SIGHUP into KeyboardInterrupt so cleanup blocks still run."""

        def _handler(signum, _frame):
            raise KeyboardInterrupt(f"Received signal {signum}")

        previous = {}
        for signum in self.TERMINATION_SIGNALS:
            try:
                previous[signum] = signal.signal(signum, _handler)
            except ValueError:
                logger.debug("Cannot install handler for signal %s outside the main thread", signum)
        try:
            yield
        finally:
            for signum, handler in previous.items():
                if handler is not None:
                    signal.signal(signum, handler)

    def client_available(self) -> bool:
        return self.which(MYSQL_CLIENT_BINARY) is not None

    def preflight(self, client_available: bool):
        if client_available:
            return

        console.print("[yellow]MySQL client not found. Checking for MySQL Docker containers...[/yellow]")
        candidates = self.locator.list_candidates()
        if candidates:
            names = ", ".join(ref.name for ref in candidates)
            console.print(f"Found MySQL container(s): {names}")
            console.print("Will use MySQL from Docker container instead of local mysql-client.")
        else:
            console.print(
                "[yellow]WARNING: MySQL client not found and no MySQL Docker containers "
                "detected.[/yellow]"
            )
            console.print("You may need to install mysql-client or start a MySQL Docker container.")

    def select_environment(self) -> Environment:
        if self.environment is not None:
            return self.environment
        return self.prompt_service.choose_environment()

    def load_settings(self) -> Mapping[str, str]:
        if self.settings is not None:
            return self.settings
        return self.settings_loader.load(self.env_file)

    def ask_server_container(self) -> Optional[ContainerRef]:
        if not self.prompt_service.ask_server_in_docker():
            return None

        candidates = self.locator.list_candidates()
        if not candidates:
            return self.prompt_service.ask_container_name()
        return self.locator.choose(candidates, self.prompt_service.ask_container_choice)

    def find_client_container(self) -> Optional[ContainerRef]:
        candidates = self.locator.list_candidates()
        if not candidates:
            return None

        ref = self.locator.choose(candidates, self.prompt_service.ask_container_choice)
        console.print(f"Using MySQL client from Docker container: {ref.name}")
        return ref

    def collect_admin_credentials(self, env: Environment):
        settings = self.load_settings()
        admin, container_hint = self.credential_resolver.resolve(env, settings)

        server_container = self.container or container_hint
        if server_container is None:
            server_container = self.ask_server_container()
        admin = self.credential_resolver.with_container(admin, server_container)

        if admin.needs_interactive_secret:
            password = self.prompt_service.ask_admin_password(admin.user, admin.host)
            admin = self.credential_resolver.with_password(admin, password)

        return admin, server_container

    def collect_request(self) -> ProvisioningRequest:
        database = self.prompt_service.ask_database()
        username = self.prompt_service.ask_username()
        user_host = self.prompt_service.ask_user_host()
        password = self.prompt_service.ask_password(username)
        grant_full = self.prompt_service.ask_full_privileges()
        return ProvisioningRequest(
            database=database,
            username=username,
            user_host=user_host,
            password=password,
            grant_full=grant_full,
        )

    def select_target(
        self,
        admin: AdminCredentials,
        server_container: Optional[ContainerRef],
        client_available: bool,
    ) -> ExecutionTarget:
        target = resolve_target(
            admin=admin,
            server_container=server_container,
            client_available=client_available,
            find_client_container=self.find_client_container,
        )
        self._set_stage(ProvisioningStage.CHANNEL_SELECTED)
        logger.info("Execution target: %s", type(target).__name__)
        return target

    def execute(self, target: ExecutionTarget, script: str) -> ExecutionOutcome:
        channel = channel_for(
            target,
            logger=logger,
            console=console,
            command_runner=self.command_runner,
            filesystem_service=self.filesystem_service,
            locator=self.locator,
        )
        self._set_stage(ProvisioningStage.EXECUTING)
        return channel.execute(target, script)

    def report_failure(self, outcome: ExecutionOutcome):
        console.print(
            f"[bold red]ERROR:[/bold red] {outcome.summary or 'Provisioning failed.'}",
            soft_wrap=True,
        )
        logger.error(outcome.summary or "Provisioning failed.")
        if not outcome.hints:
            return

        console.print()
        console.print("Common causes and solutions:")
        for index, hint in enumerate(outcome.hints, start=1):
            console.print(f"{index}. {hint}", markup=False, soft_wrap=True)
        console.print()
        console.print("Error details:")
        console.print(
            outcome.diagnostic_log or "No detailed error information available",
            markup=False,
            soft_wrap=True,
        )

    def provision(self) -> int:
        client_available = self.client_available()
        self.preflight(client_available)

        env = self.select_environment()
        admin, server_container = self.collect_admin_credentials(env)
        request = self.collect_request()
        script = build_provisioning_script(request)

        target = self.select_target(admin, server_container, client_available)
        outcome = self.execute(target, script)

        if not outcome.success:
            self._set_stage(ProvisioningStage.FAILED)
            self.report_failure(outcome)
            return 1

        path = self.credential_store.save(request, env, target.server_host)
        self._set_stage(ProvisioningStage.SUCCEEDED)
        console.print("[bold green]SUCCESS:[/bold green] Database and user created.")
        console.print(f"Credentials saved securely to: {path}", soft_wrap=True)
        return 0

    def run(self) -> int:
        console.print("[bold]=== MySQL DB & User Creator ===[/bold]")
        self.stage = ProvisioningStage.COLLECTING_INPUTS

        try:
            with self._terminate_as_interrupt():
                return self.provision()
        except KeyboardInterrupt:
            self._set_stage(ProvisioningStage.FAILED)
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except ProvisionerError as exc:
            self._set_stage(ProvisioningStage.FAILED)
            console.print(f"[bold red]Error:[/bold red] {exc}", soft_wrap=True)
            logger.error(str(exc))
            return 1
        except Exception as exc:
            self._set_stage(ProvisioningStage.FAILED)
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
