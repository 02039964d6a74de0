import re

import pytest

from mysqlprovisioner.errors import ValidationError
from mysqlprovisioner.services.passwords import generate_password
from mysqlprovisioner.services.validation import ValidationService


def test_generated_password_is_32_hex_characters():
    password = generate_password()

    assert re.fullmatch(r"[0-9a-f]{32}", password)


def test_generated_passwords_never_contain_slashes():
    for _ in range(200):
        password = generate_password()
        assert "/" not in password
        assert "\\" not in password


def test_generated_passwords_differ():
    assert generate_password() != generate_password()


@pytest.mark.parametrize("password", ["with/slash", "with\\backslash", ""])
def test_manual_password_rejects_empty_and_slashes(password):
    with pytest.raises(ValidationError):
        ValidationService().validate_manual_password(password)


def test_manual_password_keeps_value_verbatim():
    assert ValidationService().validate_manual_password(" p@ss'w0rd ") == " p@ss'w0rd "


def test_required_values_are_stripped_and_non_empty():
    service = ValidationService()

    assert service.validate_username("  shop_user ") == "shop_user"
    with pytest.raises(ValidationError, match="Username cannot be empty"):
        service.validate_username("   ")


def test_database_name_cannot_contain_path_separators():
    service = ValidationService()

    assert service.validate_database_name("shop") == "shop"
    with pytest.raises(ValidationError, match="Database name cannot contain"):
        service.validate_database_name("../shop")
    with pytest.raises(ValidationError, match="Database name cannot contain"):
        service.validate_database_name("shop\\prod")
