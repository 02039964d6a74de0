"""Interactive prompts for mysqlprovisioner."""

from typing import Callable, Sequence

import click

from mysqlprovisioner.constants import DEFAULT_ENVIRONMENT, DEFAULT_USER_HOST
from mysqlprovisioner.errors import ValidationError
from mysqlprovisioner.models import ContainerRef, Environment
from mysqlprovisioner.services.passwords import generate_password
from mysqlprovisioner.services.validation import ValidationService


class PromptService:
    """Collects operator input in a fixed order, re-asking on invalid answers."""

    ENVIRONMENT_CHOICES = ["local", "dev", "prod", "production"]
    MANUAL_CHOICES = ("m", "manual")
    PASSWORD_MODE_CHOICES = ["m", "manual", "g", "gen", "generate"]

    def __init__(self, console, validation_service: ValidationService = None):
        self.console = console
        self.validation_service = validation_service or ValidationService()

    def _ask_validated(self, text: str, validator: Callable[[str], str], **prompt_kwargs) -> str:
        while True:
            value = click.prompt(text, **prompt_kwargs)
            try:
                return validator(value)
            except ValidationError as exc:
                self.console.print(f"[yellow]{exc}[/yellow]")

    def choose_environment(self) -> Environment:
        value = click.prompt(
            "Select environment (local, dev, or prod)",
            type=click.Choice(self.ENVIRONMENT_CHOICES, case_sensitive=False),
            default=DEFAULT_ENVIRONMENT,
        )
        return Environment.parse(value)

    def ask_server_in_docker(self) -> bool:
        return click.confirm("Is MySQL running in Docker?", default=False)

    def ask_container_choice(self, candidates: Sequence[ContainerRef]) -> str:
        self.console.print("Found MySQL containers:")
        for index, ref in enumerate(candidates, start=1):
            self.console.print(f"  {index}. {ref.name}")
        return click.prompt("Enter container name or number", default="1")

    def ask_container_name(self) -> ContainerRef:
        name = self._ask_validated(
            "Enter Docker container name",
            lambda value: self.validation_service.require_value(value, "Container name"),
        )
        return ContainerRef(name)

    def ask_admin_password(self, user: str, host: str) -> str:
        return click.prompt(
            f"Admin password for {user}@{host} (input hidden)",
            default="",
            show_default=False,
            hide_input=True,
        )

    def ask_database(self) -> str:
        return self._ask_validated(
            "New database name (example: myapp_db)",
            self.validation_service.validate_database_name,
        )

    def ask_username(self) -> str:
        return self._ask_validated(
            "New username (example: myapp_user)",
            self.validation_service.validate_username,
        )

    def ask_user_host(self) -> str:
        return self._ask_validated(
            "MySQL user host (%, localhost, or IP)",
            self.validation_service.validate_user_host,
            default=DEFAULT_USER_HOST,
        )

    def ask_password(self, username: str) -> str:
        mode = click.prompt(
            "Do you want to (m)anually provide password or (g)enerate automatically?",
            type=click.Choice(self.PASSWORD_MODE_CHOICES, case_sensitive=False),
            default="g",
        )
        if mode.lower() not in self.MANUAL_CHOICES:
            return generate_password()

        return self._ask_validated(
            f"Enter password for {username}",
            self.validation_service.validate_manual_password,
            hide_input=True,
        )

    def ask_full_privileges(self) -> bool:
        return click.confirm("Grant FULL (ALL PRIVILEGES) to this user?", default=True)
