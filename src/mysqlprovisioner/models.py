"""Shared domain models for mysqlprovisioner."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from .constants import DEFAULT_USER_HOST


class Environment(Enum):
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        clean_value = (value or "").strip().lower()
        if clean_value == "production":
            clean_value = "prod"
        try:
            return cls(clean_value)
        except ValueError as exc:
            raise ValueError(f"Unknown environment: {value!r}") from exc

    @property
    def config_prefix(self) -> str:
        return self.value.upper()


class ProvisioningStage(Enum):
    COLLECTING_INPUTS = "collecting_inputs"
    CHANNEL_SELECTED = "channel_selected"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class AdminCredentials:
    """Privileged account used to run the provisioning script."""

    host: str
    user: str
    password: str = field(default="", repr=False)

    @property
    def needs_interactive_secret(self) -> bool:
        return not self.password


@dataclass(frozen=True)
class ContainerRef:
    name: str


@dataclass(frozen=True)
class DirectTarget:
    """MySQL reached over the network with the local client."""

    admin: AdminCredentials

    @property
    def server_host(self) -> str:
        return self.admin.host


@dataclass(frozen=True)
class ContainerTarget:
    """MySQL client executed inside a running container."""

    container: ContainerRef
    admin: AdminCredentials
    inner_host: str
    server_in_container: bool

    @property
    def server_host(self) -> str:
        return self.inner_host


ExecutionTarget = Union[DirectTarget, ContainerTarget]


@dataclass(frozen=True)
class ProvisioningRequest:
    """Database and application user to create."""

    database: str
    username: str
    password: str = field(repr=False)
    user_host: str = DEFAULT_USER_HOST
    grant_full: bool = True


@dataclass(frozen=True)
class ExecutionOutcome:
    """Channel-agnostic result of running a SQL script."""

    success: bool
    diagnostic_log: str = ""
    hints: Tuple[str, ...] = ()
    summary: Optional[str] = None
