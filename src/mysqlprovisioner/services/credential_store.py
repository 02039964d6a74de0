"""Persistence of provisioned credentials to owner-only files."""

import os
from datetime import datetime, timezone
from typing import Optional

from mysqlprovisioner.constants import CREDENTIAL_FILE_SUFFIX
from mysqlprovisioner.models import Environment, ProvisioningRequest


class CredentialStore:
    """Writes one ``<database>_<env>.cred`` file per database and environment.

    The directory is restricted to the owner and each file is readable by
    the owner only. Rerunning with the same key replaces the previous file.
    """

    def __init__(self, output_dir: str, filesystem_service, logger):
        self.output_dir = output_dir
        self.filesystem_service = filesystem_service
        self.logger = logger

    def credential_path(self, database: str, env: Environment) -> str:
        return os.path.join(self.output_dir, f"{database}_{env.value}{CREDENTIAL_FILE_SUFFIX}")

    @staticmethod
    def render(
        request: ProvisioningRequest,
        env: Environment,
        mysql_host: str,
        created_at: Optional[datetime] = None,
    ) -> str:
        created = (created_at or datetime.now(timezone.utc)).astimezone(timezone.utc)
        lines = [
            f"# created: {created.strftime('%Y-%m-%dT%H:%M:%SZ')}",
            f"environment: {env.value}",
            f"mysql_host: {mysql_host}",
            f"database: {request.database}",
            f"user: {request.username}",
            f"user_host: {request.user_host}",
            f"password: {request.password}",
        ]
        return "\n".join(lines) + "\n"

    def save(self, request: ProvisioningRequest, env: Environment, mysql_host: str) -> str:
        self.filesystem_service.ensure_private_dir(self.output_dir)
        path = self.credential_path(request.database, env)
        self.filesystem_service.write_private_file(path, self.render(request, env, mysql_host))
        self.logger.debug("Credentials saved to %s", path)
        return path
