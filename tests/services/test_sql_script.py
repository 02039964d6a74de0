import re

import pytest

from mysqlprovisioner.models import ProvisioningRequest
from mysqlprovisioner.services.sql_script import (
    build_provisioning_script,
    build_provisioning_statements,
    escape_identifier,
    escape_literal,
)


def _request(**overrides):
    values = {
        "database": "shop",
        "username": "shop_user",
        "user_host": "%",
        "password": "0123456789abcdef0123456789abcdef",
        "grant_full": True,
    }
    values.update(overrides)
    return ProvisioningRequest(**values)


def _unquote_identifier(quoted: str) -> str:
    assert quoted.startswith("`") and quoted.endswith("`")
    return quoted[1:-1].replace("``", "`")


def _unquote_literal_body(body: str) -> str:
    return re.sub(r"''|\\\\", lambda match: match.group(0)[0], body)


@pytest.mark.parametrize(
    "request_values",
    [
        {},
        {"grant_full": False},
        {"database": "we`ird", "username": "o'brien", "user_host": "10.0.%"},
    ],
)
def test_statement_order_is_fixed(request_values):
    statements = build_provisioning_statements(_request(**request_values))

    expected_prefixes = [
        "CREATE DATABASE IF NOT EXISTS ",
        "CREATE USER IF NOT EXISTS ",
        "ALTER USER ",
        "GRANT ",
        "FLUSH PRIVILEGES;",
    ]
    assert len(statements) == len(expected_prefixes)
    for statement, prefix in zip(statements, expected_prefixes):
        assert statement.startswith(prefix)


def test_script_matches_expected_text():
    script = build_provisioning_script(_request(password="pw"))

    assert script == (
        "CREATE DATABASE IF NOT EXISTS `shop` CHARACTER SET utf8mb4 COLLATE utf8mb4_general_ci;\n"
        "CREATE USER IF NOT EXISTS 'shop_user'@'%' IDENTIFIED BY 'pw';\n"
        "ALTER USER 'shop_user'@'%' IDENTIFIED BY 'pw';\n"
        "GRANT ALL PRIVILEGES ON `shop`.* TO 'shop_user'@'%';\n"
        "FLUSH PRIVILEGES;\n"
    )


def test_reduced_grant_lists_fixed_privileges():
    statements = build_provisioning_statements(_request(grant_full=False))

    assert statements[3] == (
        "GRANT SELECT, INSERT, UPDATE, DELETE, CREATE, DROP, INDEX, ALTER "
        "ON `shop`.* TO 'shop_user'@'%';"
    )


@pytest.mark.parametrize("name", ["plain", "we`ird", "``", "a`b`c"])
def test_escape_identifier_round_trips(name):
    assert _unquote_identifier(escape_identifier(name)) == name


@pytest.mark.parametrize("value", ["plain", "o'brien", "''", "back\\slash", "mix'\\'"])
def test_escape_literal_round_trips(value):
    assert _unquote_literal_body(escape_literal(value)) == value


def test_embedded_quotes_do_not_terminate_literal():
    statements = build_provisioning_statements(_request(username="x'; DROP DATABASE shop; --"))

    assert "'x''; DROP DATABASE shop; --'@'%'" in statements[1]
