import re

import mysqlprovisioner.services.prompts as prompts_module
from mysqlprovisioner.services.prompts import PromptService


class DummyConsole:
    def __init__(self):
        self.messages = []

    def print(self, *args, **_kwargs):
        self.messages.append(" ".join(str(arg) for arg in args))


def _scripted_prompt(monkeypatch, answers):
    remaining = list(answers)

    def fake_prompt(text, **_kwargs):
        return remaining.pop(0)

    monkeypatch.setattr(prompts_module.click, "prompt", fake_prompt)
    return remaining


def test_ask_password_returns_generated_secret(monkeypatch):
    _scripted_prompt(monkeypatch, ["g"])

    password = PromptService(console=DummyConsole()).ask_password("shop_user")

    assert isinstance(password, str)
    assert re.fullmatch(r"[0-9a-f]{32}", password)


def test_ask_password_returns_manual_secret_after_rejection(monkeypatch):
    remaining = _scripted_prompt(monkeypatch, ["manual", "bad/pass", "good-pass"])
    console = DummyConsole()

    password = PromptService(console=console).ask_password("shop_user")

    assert password == "good-pass"
    assert remaining == []
    assert any("cannot contain" in message for message in console.messages)
