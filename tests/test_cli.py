"""Tests for the taskpad command line."""

import json
from datetime import datetime

import pytest

from taskpad.cli import main
from taskpad.repeat import RepeatKind
from taskpad.store import TaskStore
from taskpad.task import Task
from taskpad.task_page import PageAction, TaskPage


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "tasks.json"


def run(data_file, *argv):
    return main(["--data", str(data_file), *argv])


class TestAdd:

    def test_add_with_fields(self, data_file, capsys):
        rc = run(data_file, "add", "Pay rent", "--date", "01-11-2026", "--repeats", "Monthly", "--group", "Home")
        assert rc == 0
        assert capsys.readouterr().out.startswith("[1] Pay rent")

        task = TaskStore.load(data_file).get(1)
        assert task.date == datetime(2026, 11, 1)
        assert task.repeats.kind is RepeatKind.MONTHLY
        assert task.group == "Home"
        assert task.description is None

    def test_soft_defaults(self, data_file, capsys):
        assert run(data_file, "add", "Gym", "--date", "soon", "--repeats", "Sometime") == 0
        task = TaskStore.load(data_file).get(1)
        assert task.repeats.is_never
        assert task.date.date() == datetime.now().date()

    def test_json_format(self, data_file, capsys):
        run(data_file, "add", "Gym", "--repeats", "Mon,Fri", "--format", "json")
        out = json.loads(capsys.readouterr().out)
        assert out["name"] == "Gym"
        assert out["repeats"] == "Mon,Fri"
        assert "group" not in out


class TestListAndDelete:

    def test_list(self, data_file, capsys):
        run(data_file, "add", "B", "--date", "02-11-2026")
        run(data_file, "add", "A", "--date", "01-11-2026", "--description", "first")
        capsys.readouterr()
        assert run(data_file, "list") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("[2] A")
        assert lines[1] == "    first"
        assert lines[2].startswith("[1] B")

    def test_delete(self, data_file):
        run(data_file, "add", "A")
        assert run(data_file, "delete", "1") == 0
        assert len(TaskStore.load(data_file)) == 0

    def test_delete_missing(self, data_file, capsys):
        assert run(data_file, "delete", "9") == 1
        assert "error: No task with id 9" in capsys.readouterr().err


class TestInteractive:

    def test_edit_saves_page_result(self, data_file, monkeypatch):
        store = TaskStore(data_file)
        store.add(Task(name="Gym"))
        store.save()

        def fake_run(self, store):
            self.task_form.add_char("!")
            assert self.submit(store)
            return PageAction.SAVED

        monkeypatch.setattr(TaskPage, "run", fake_run)
        assert run(data_file, "edit", "1") == 0
        assert TaskStore.load(data_file).get(1).name == "Gym!"

    def test_new_not_saved_when_quit(self, data_file, monkeypatch):
        monkeypatch.setattr(TaskPage, "run", lambda self, store: PageAction.QUIT)
        assert run(data_file, "new") == 0
        assert not data_file.exists()

    def test_edit_missing(self, data_file, capsys):
        assert run(data_file, "edit", "3") == 1
        assert "No task with id 3" in capsys.readouterr().err


def test_no_command(capsys):
    assert main([]) == 1


class TestErrors:

    def test_invalid_config(self, data_file, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text("quit = ", encoding="utf-8")
        assert main(["--config", str(config), "--data", str(data_file), "list"]) == 1
        assert capsys.readouterr().err.startswith("error: Invalid config")

    def test_malformed_task_record(self, data_file, capsys):
        data_file.write_text('[{"name": "x", "date": "not-a-date"}]', encoding="utf-8")
        assert run(data_file, "list") == 1
        assert "error: Malformed task record" in capsys.readouterr().err
