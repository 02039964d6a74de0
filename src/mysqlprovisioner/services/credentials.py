"""Administrator credential resolution for mysqlprovisioner."""

from typing import Mapping, Optional, Tuple

from mysqlprovisioner.constants import (
    CONTAINER_MYSQL_HOST,
    DEFAULT_ADMIN_USER,
    DEFAULT_MYSQL_HOST,
)
from mysqlprovisioner.models import AdminCredentials, ContainerRef, Environment


class CredentialResolver:
    """Merges environment-prefixed settings with defaults.

    Looks up ``{ENV}_MYSQL_HOST``, ``{ENV}_ADMIN_USER``, ``{ENV}_ADMIN_PASS``
    and ``{ENV}_DOCKER_CONTAINER``. Empty values are treated as missing. A
    pinned container implies the client runs next to the server, so the host
    becomes ``localhost``.
    """

    HOST_KEY = "MYSQL_HOST"
    USER_KEY = "ADMIN_USER"
    PASSWORD_KEY = "ADMIN_PASS"
    CONTAINER_KEY = "DOCKER_CONTAINER"

    def __init__(self, logger):
        self.logger = logger

    @staticmethod
    def config_key(env: Environment, suffix: str) -> str:
        return f"{env.config_prefix}_{suffix}"

    def _lookup(
        self,
        env: Environment,
        config: Mapping[str, str],
        suffix: str,
        default: str = "",
    ) -> str:
        key = self.config_key(env, suffix)
        value = (config.get(key) or "").strip()
        if value:
            return value
        if default:
            self.logger.debug("%s not set, using default '%s'", key, default)
        return default

    def resolve(
        self,
        env: Environment,
        config: Mapping[str, str],
    ) -> Tuple[AdminCredentials, Optional[ContainerRef]]:
        container_name = self._lookup(env, config, self.CONTAINER_KEY)
        container_hint = ContainerRef(container_name) if container_name else None

        if container_hint:
            host = CONTAINER_MYSQL_HOST
        else:
            host = self._lookup(env, config, self.HOST_KEY, DEFAULT_MYSQL_HOST)

        user = self._lookup(env, config, self.USER_KEY, DEFAULT_ADMIN_USER)
        # Passwords may legitimately contain surrounding spaces.
        password = config.get(self.config_key(env, self.PASSWORD_KEY)) or ""

        credentials = AdminCredentials(host=host, user=user, password=password)
        if credentials.needs_interactive_secret:
            self.logger.debug(
                "%s not set, the admin password will be requested interactively",
                self.config_key(env, self.PASSWORD_KEY),
            )
        return credentials, container_hint

    def with_container(
        self,
        credentials: AdminCredentials,
        container: Optional[ContainerRef],
    ) -> AdminCredentials:
        """Returns credentials addressed from inside ``container``, if any."""
        if container is None:
            return credentials
        return AdminCredentials(
            host=CONTAINER_MYSQL_HOST,
            user=credentials.user,
            password=credentials.password,
        )

    def with_password(self, credentials: AdminCredentials, password: str) -> AdminCredentials:
        return AdminCredentials(host=credentials.host, user=credentials.user, password=password)
