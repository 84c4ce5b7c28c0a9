import json

from confdb import cli, jsondb
from confdb.cli import ExitStatus, delete_files, main, print_files


def _run(capsys, argv):
    status = main(argv)
    out = capsys.readouterr().out
    return status, json.loads(out)


def _write(path, content):
    path.write_text(json.dumps(content), encoding="utf-8")
    return str(path)


def test_no_parameters_is_invalid(capsys):
    status, result = _run(capsys, [])
    assert status == ExitStatus.SUCCESS
    assert result == {"returnValue": False, "errorText": "Invalid Parameter"}


def test_unknown_option_is_invalid_arguments(capsys):
    status, result = _run(capsys, ["--bogus"])
    assert status == ExitStatus.INVALID_ARGUMENTS
    assert result["returnValue"] is False
    assert "--bogus" in result["errorText"]


def test_diff_reports_differences(tmp_path, capsys):
    a = _write(tmp_path / "a.json", {"cat": {"x": 1, "gone": 0}})
    b = _write(tmp_path / "b.json", {"cat": {"x": 1, "new": 0}})
    status, result = _run(capsys, ["--diff", a, b])
    assert status == ExitStatus.SUCCESS
    assert result["removedKeys"] == ["cat.gone"]
    assert result["addedKeys"] == ["cat.new"]
    assert result["isDifferent"] is True
    assert result["returnValue"] is True


def test_diff_with_unreadable_file(tmp_path, capsys):
    a = _write(tmp_path / "a.json", {"cat": {"x": 1}})
    status, result = _run(capsys, ["--diff", a, str(tmp_path / "missing.json")])
    assert result == {"returnValue": False, "errorText": "failed to load input files"}


def test_search_matches(tmp_path, capsys):
    db = _write(tmp_path / "db.json", {
        "com.palm.app.settings": {"enableHdmiPcLabel": False},
        "tv.rmm": {"ttxMode": 30},
    })
    status, result = _run(capsys, ["--search=settings", db])
    assert result == {
        "com.palm.app.settings.enableHdmiPcLabel": False,
        "returnValue": True,
    }


def test_search_without_match(tmp_path, capsys):
    db = _write(tmp_path / "db.json", {"tv.rmm": {"ttxMode": 30}})
    status, result = _run(capsys, ["--search=nothing", db])
    assert result == {"returnValue": False, "errorText": "Cannot search from database"}


def test_get_config(tmp_path, capsys):
    db = _write(tmp_path / "db.json", {"tv.rmm": {"ttxMode": 30}})
    status, result = _run(capsys, ["--get-config=tv.rmm.ttxMode", db])
    assert result == {"tv.rmm.ttxMode": 30, "returnValue": True}


def test_get_config_missing(tmp_path, capsys):
    db = _write(tmp_path / "db.json", {"tv.rmm": {"ttxMode": 30}})
    status, result = _run(capsys, ["--get-config=tv.rmm.other", db])
    assert result == {"returnValue": False, "errorText": "Cannot find config"}


def test_print_files(capsys):
    print_files()
    out = capsys.readouterr().out
    assert f"Main DB - {jsondb.FILENAME_MAIN_DB}" in out
    assert f"Factory DB - {jsondb.FILENAME_FACTORY_DB}" in out
    assert f"Debug DB - {jsondb.FILENAME_DEBUG_DB}" in out


def test_delete_files(tmp_path, monkeypatch, capsys):
    main_db = tmp_path / "main.json"
    main_db.write_text("{}", encoding="utf-8")
    dumped = tmp_path / "configd_dump.json"
    dumped.write_text("{}", encoding="utf-8")
    keep = tmp_path / "other.json"
    keep.write_text("{}", encoding="utf-8")
    monkeypatch.setattr(jsondb, "FILENAME_MAIN_DB", str(main_db))
    monkeypatch.setattr(jsondb, "FILENAME_FACTORY_DB", str(tmp_path / "factory.json"))
    monkeypatch.setattr(jsondb, "FILENAME_DEBUG_DB", str(tmp_path / "debug.json"))
    monkeypatch.setattr(cli, "DUMP_PATTERN", str(tmp_path / "configd_*"))
    delete_files()
    out = capsys.readouterr().out
    assert f"MainDB {main_db} deleted" in out
    assert "FactoryDB" not in out
    assert not main_db.exists()
    assert not dumped.exists()
    assert keep.exists()


def test_print_option_succeeds(capsys):
    status = main(["--print"])
    out = capsys.readouterr().out
    assert status == ExitStatus.SUCCESS
    assert out.startswith("Log file - ")
    assert '"returnValue": true' in out