"""Input validation helpers for mysqlprovisioner."""

from mysqlprovisioner.constants import FORBIDDEN_PASSWORD_CHARS, PATH_SEPARATOR_CHARS
from mysqlprovisioner.errors import ValidationError
from mysqlprovisioner.errors_catalog import actionable_error


class ValidationService:
    """Validates interactive answers before they reach the SQL script."""

    def require_value(self, value: str, label: str) -> str:
        clean_value = (value or "").strip()
        if not clean_value:
            raise ValidationError(actionable_error("empty_value", label=label))
        return clean_value

    def validate_database_name(self, value: str) -> str:
        # The name is also used as the credential file name.
        clean_value = self.require_value(value, "Database name")
        if any(char in clean_value for char in PATH_SEPARATOR_CHARS):
            raise ValidationError(actionable_error("forbidden_characters", label="Database name"))
        return clean_value

    def validate_username(self, value: str) -> str:
        return self.require_value(value, "Username")

    def validate_user_host(self, value: str) -> str:
        return self.require_value(value, "Host")

    def validate_manual_password(self, value: str) -> str:
        if not value:
            raise ValidationError(actionable_error("empty_value", label="Password"))
        if any(char in value for char in FORBIDDEN_PASSWORD_CHARS):
            raise ValidationError(actionable_error("forbidden_characters", label="Password"))
        return value
