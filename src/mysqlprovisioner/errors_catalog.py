"""Actionable error catalog for mysqlprovisioner."""

from typing import Dict, Tuple

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "empty_value": {
        "what": "{label} cannot be empty.",
        "next": "Enter a non-empty value.",
    },
    "forbidden_characters": {
        "what": "{label} cannot contain '/' or '\\'.",
        "next": "Choose a value without slashes or generate a password automatically.",
    },
    "container_not_found": {
        "what": "No running MySQL or MariaDB container was found.",
        "next": "Start the container (`docker ps` should list it) or set {key} in your .env file.",
    },
    "container_not_running": {
        "what": "Docker container '{name}' is not running.",
        "next": "Please start the container first: docker start {name}",
    },
    "client_unavailable": {
        "what": "MySQL client not found and no MySQL Docker containers detected.",
        "next": "Install mysql-client or start a MySQL Docker container and try again.",
    },
    "command_not_found": {
        "what": "Required command not found: {command}.",
        "next": "Please install it and try again.",
    },
    "execution_failed_direct": {
        "what": "Failed to execute MySQL commands on {host}.",
        "next": "Review the causes listed above and the error details.",
    },
    "execution_failed_container": {
        "what": "Failed to execute MySQL commands in Docker container '{name}'.",
        "next": "Review the causes listed above and the error details.",
    },
}

_DIRECT_CHECKLIST: Tuple[str, ...] = (
    "Authentication failed - Check your password",
    "Network connectivity - Verify the host is reachable",
    "MySQL service not running - Check if MySQL is running on target host",
    "Firewall blocking - Ensure port 3306 is open",
    "User permissions - Verify the user can connect from your IP",
    "If using Docker, make sure port is mapped (e.g., -p 3306:3306)",
)

_CONTAINER_CHECKLIST: Tuple[str, ...] = (
    "Authentication failed - Check your password",
    "Container not running - Verify container is running: docker ps",
    "Wrong container name - Check container name: docker ps",
    "MySQL not installed in container - Verify MySQL is installed in the container",
)


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"


def direct_failure_checklist() -> Tuple[str, ...]:
    return _DIRECT_CHECKLIST


def container_failure_checklist(remote_host: str = "") -> Tuple[str, ...]:
    """Causes for a failed ``docker exec``; ``remote_host`` is set when the
    server lives outside the container running the client."""
    if not remote_host:
        return _CONTAINER_CHECKLIST
    return _CONTAINER_CHECKLIST + (
        f"Host {remote_host} not reachable from container - Check network connectivity",
    )
