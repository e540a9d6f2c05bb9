"""CLI tests."""

import json

from trip_coherence.cli import EXIT_BAD_INPUT, EXIT_OK, EXIT_RESIDUAL, main


def _item(item_id: str, type_: str, title: str, start: str, end: str) -> dict:
    return {"id": item_id, "type": type_, "title": title, "start_time": start, "end_time": end}


def _write_trip(tmp_path, days: list[list[dict]]) -> str:
    payload = {
        "id": "trip-1",
        "title": "Paris",
        "destination": "Paris",
        "days": [{"day_number": index + 1, "items": items} for index, items in enumerate(days)],
    }
    path = tmp_path / "trip.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return str(path)


def _overlapping_days() -> list[list[dict]]:
    return [
        [],
        [
            _item("museum", "activity", "Musée Rodin", "10:00", "11:00"),
            _item("market", "activity", "Marché Bastille", "10:30", "11:30"),
        ],
        [],
    ]


def test_check_reports_errors(tmp_path, capsys):
    path = _write_trip(tmp_path, _overlapping_days())
    assert main(["check", path]) == EXIT_RESIDUAL
    report = json.loads(capsys.readouterr().out)
    assert report["valid"] is False
    assert [row["kind"] for row in report["errors"]] == ["OVERLAP"]
    assert "repaired" not in report


def test_check_clean_trip(tmp_path, capsys):
    path = _write_trip(tmp_path, [[_item("walk", "activity", "Montmartre", "10:00", "12:00")]])
    assert main(["check", path]) == EXIT_OK
    assert json.loads(capsys.readouterr().out)["valid"] is True


def test_fix_writes_repaired_trip(tmp_path):
    path = _write_trip(tmp_path, _overlapping_days())
    output = tmp_path / "fixed.json"
    assert main(["fix", path, "-o", str(output)]) == EXIT_OK
    fixed = json.loads(output.read_text(encoding="utf-8"))
    market = next(row for row in fixed["days"][1]["items"] if row["id"] == "market")
    assert (market["start_time"], market["end_time"]) == ("11:15", "12:15")


def test_fix_reports_unresolved_errors(tmp_path, capsys):
    days = [
        [],
        [
            _item("train", "transport", "Train Paris → Lyon", "20:00", "22:30"),
            _item("bus", "transport", "Bus Lyon → Annecy", "22:00", "23:00"),
        ],
        [],
    ]
    path = _write_trip(tmp_path, days)
    assert main(["fix", path]) == EXIT_RESIDUAL
    fixed = json.loads(capsys.readouterr().out)
    assert [row["id"] for row in fixed["days"][1]["items"]] == ["train", "bus"]


def test_env_file_is_loaded(tmp_path, monkeypatch):
    # register the variable so the value loaded from the file is undone afterwards
    monkeypatch.setenv("COHERENCE_REPAIR_WARNINGS", "true")
    monkeypatch.delenv("COHERENCE_REPAIR_WARNINGS")
    env_file = tmp_path / "coherence.env"
    env_file.write_text("COHERENCE_REPAIR_WARNINGS=false\n", encoding="utf-8")
    days = [
        [_item("e1", "activity", "Tour Eiffel", "10:00", "12:00")],
        [_item("e2", "activity", "Tour Eiffel", "10:00", "12:00")],
    ]
    path = _write_trip(tmp_path, days)
    output = tmp_path / "fixed.json"

    assert main(["--env-file", str(env_file), "fix", path, "-o", str(output)]) == EXIT_OK
    fixed = json.loads(output.read_text(encoding="utf-8"))
    assert [row["id"] for row in fixed["days"][1]["items"]] == ["e2"]


def test_bad_input_exit_code(tmp_path, capsys):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert main(["check", str(broken)]) == EXIT_BAD_INPUT
    assert main(["check", str(tmp_path / "missing.json")]) == EXIT_BAD_INPUT

    invalid = _write_trip(tmp_path, [[_item("x", "spaceship", "UFO", "10:00", "11:00")]])
    assert main(["check", invalid]) == EXIT_BAD_INPUT
    assert "trip-coherence:" in capsys.readouterr().err


def test_invalid_rounds_exit_code(tmp_path):
    path = _write_trip(tmp_path, _overlapping_days())
    assert main(["--max-rounds", "0", "fix", path]) == EXIT_BAD_INPUT
