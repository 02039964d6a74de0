import pytest

from mysqlprovisioner.errors_catalog import (
    actionable_error,
    container_failure_checklist,
    direct_failure_checklist,
)


def test_actionable_error_formats_message_with_suggested_action():
    message = actionable_error("container_not_running", name="mysql_test")

    assert "Docker container 'mysql_test' is not running." in message
    assert "Suggested action: Please start the container first: docker start mysql_test" in message


def test_actionable_error_rejects_unknown_code():
    with pytest.raises(KeyError):
        actionable_error("does_not_exist")


def test_direct_checklist_mentions_authentication_and_port():
    checklist = direct_failure_checklist()

    assert len(checklist) == 6
    assert checklist[0].startswith("Authentication failed")
    assert any("3306" in item for item in checklist)


def test_container_checklist_adds_reachability_for_remote_server():
    assert len(container_failure_checklist()) == 4

    checklist = container_failure_checklist("10.0.0.5")

    assert len(checklist) == 5
    assert "Host 10.0.0.5 not reachable from container" in checklist[-1]
