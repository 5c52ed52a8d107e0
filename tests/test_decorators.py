"""Tests for console decorators."""

import logging

from src.json_db.decorators import confirm_action, handle_db_errors, log_time
from src.json_db.errors import FileReadError


def test_handle_db_errors_prints_and_returns_none(capsys):
    @handle_db_errors
    def broken():
        raise FileReadError("bad json")

    assert broken() is None
    assert "Ошибка чтения файла таблицы: bad json" in capsys.readouterr().out


def test_handle_db_errors_passes_result_through():
    @handle_db_errors
    def fine():
        return 5

    assert fine() == 5


def test_confirm_action_declined(monkeypatch, capsys):
    calls = []

    @confirm_action("тест")
    def action(session, name):
        calls.append(name)

    monkeypatch.setattr("builtins.input", lambda _text: "n")

    assert action(None, "users") is None
    assert calls == []
    assert "Операция отменена." in capsys.readouterr().out


def test_confirm_action_names_arguments(monkeypatch):
    questions = []

    @confirm_action("переименование таблицы")
    def action(session, old, new):
        return (session, old, new)

    def answer(text):
        questions.append(text)
        return " Да "

    monkeypatch.setattr("builtins.input", answer)

    assert action("s", "users", "people") == ("s", "users", "people")
    assert "(users -> people)" in questions[0]


def test_log_time(caplog):
    @log_time
    def work():
        return "done"

    with caplog.at_level(logging.DEBUG, logger="src.json_db.decorators"):
        assert work() == "done"

    assert "work finished in" in caplog.text
