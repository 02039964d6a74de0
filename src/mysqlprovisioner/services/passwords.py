"""Secret generation for new database users."""

import secrets

from mysqlprovisioner.constants import GENERATED_PASSWORD_BYTES


def generate_password(num_bytes: int = GENERATED_PASSWORD_BYTES) -> str:
    # Hex output never contains '/' or '\'.
    return secrets.token_hex(num_bytes)
