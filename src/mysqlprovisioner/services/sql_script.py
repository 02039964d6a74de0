"""SQL script construction for database and user provisioning."""

from typing import List

from mysqlprovisioner.constants import (
    DATABASE_CHARSET,
    DATABASE_COLLATION,
    REDUCED_PRIVILEGES,
)
from mysqlprovisioner.models import ProvisioningRequest


def escape_identifier(name: str) -> str:
    """Quotes a schema identifier, doubling embedded backticks."""
    return "`" + name.replace("`", "``") + "`"


def escape_literal(value: str) -> str:
    """Escapes the body of a single-quoted string literal.

    Backslashes are doubled as well since MySQL treats them as escape
    characters under the default SQL mode.
    """
    return value.replace("\\", "\\\\").replace("'", "''")


def quote_literal(value: str) -> str:
    return f"'{escape_literal(value)}'"


def account_name(username: str, host: str) -> str:
    return f"{quote_literal(username)}@{quote_literal(host)}"


def build_grant_statement(request: ProvisioningRequest) -> str:
    privileges = "ALL PRIVILEGES" if request.grant_full else ", ".join(REDUCED_PRIVILEGES)
    account = account_name(request.username, request.user_host)
    return f"GRANT {privileges} ON {escape_identifier(request.database)}.* TO {account};"


def build_provisioning_statements(request: ProvisioningRequest) -> List[str]:
    """Returns the provisioning batch in execution order.

    The user is created before it is granted anything, and ALTER USER
    always runs so an existing account ends up with the requested password.
    """
    database = escape_identifier(request.database)
    account = account_name(request.username, request.user_host)
    password = quote_literal(request.password)

    return [
        f"CREATE DATABASE IF NOT EXISTS {database} "
        f"CHARACTER SET {DATABASE_CHARSET} COLLATE {DATABASE_COLLATION};",
        f"CREATE USER IF NOT EXISTS {account} IDENTIFIED BY {password};",
        f"ALTER USER {account} IDENTIFIED BY {password};",
        build_grant_statement(request),
        "FLUSH PRIVILEGES;",
    ]


def build_provisioning_script(request: ProvisioningRequest) -> str:
    return "\n".join(build_provisioning_statements(request)) + "\n"
