"""Tests for the command line interface."""

import json

import pytest

from endurance_analytics.cli import build_parser, main


def _write_json(tmp_path, name, rows):
    path = tmp_path / name
    path.write_text(json.dumps(rows), encoding="utf-8")
    return str(path)


@pytest.fixture
def workouts_file(tmp_path):
    rows = []
    for day in range(1, 22):
        rows.append({
            "sport": "bike" if day % 2 else "run",
            "date": f"2026-05-{day:02d}",
            "duration_seconds": 3600,
            "normalized_power": 200 if day % 2 else None,
            "avg_pace_sec_per_km": None if day % 2 else 300,
            "distance_meters": 32000 if day % 2 else 12000,
            "avg_hr": 140,
        })
    return _write_json(tmp_path, "workouts.json", rows)


class TestParser:
    """Tests for argument parsing."""

    def test_custom_distance_not_offered(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["plan", "--workouts", "w.json", "--distance", "custom"])

    def test_dates_parsed(self):
        args = build_parser().parse_args(["load", "--workouts", "w.json", "--as-of", "2026-06-01"])
        assert args.as_of.isoformat() == "2026-06-01"
        assert args.days == 14


class TestZonesCommand:
    """Tests for the zones command."""

    def test_prints_thresholds(self, capsys):
        main(["zones", "--max-hr", "190", "--rest-hr", "50"])
        output = capsys.readouterr().out
        assert "Lactate Thresholds" in output
        assert "148" in output
        assert "169" in output

    def test_invalid_inputs_exit(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["zones", "--max-hr", "110", "--rest-hr", "115"])
        assert exc_info.value.code == 1
        assert "Resting HR must be lower than max HR" in capsys.readouterr().out


class TestLoadCommand:
    """Tests for the load command."""

    def test_prints_table(self, workouts_file, capsys):
        main(["load", "--workouts", workouts_file, "--days", "7"])
        assert "Training Load" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["load", "--workouts", str(tmp_path / "nope.json")])
        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().out

    def test_invalid_record(self, tmp_path, capsys):
        path = _write_json(tmp_path, "bad.json", [{"sport": "rowing", "date": "2026-05-01"}])
        with pytest.raises(SystemExit) as exc_info:
            main(["load", "--workouts", path])
        assert exc_info.value.code == 1
        assert "Invalid Workout at index 0" in capsys.readouterr().out


class TestEfficiencyCommand:
    """Tests for the efficiency command."""

    def test_lists_sports(self, workouts_file, capsys):
        main(["efficiency", "--workouts", workouts_file, "--as-of", "2026-05-21"])
        output = capsys.readouterr().out
        assert "Efficiency Factor" in output
        assert "bike" in output


class TestDecouplingCommand:
    """Tests for the decoupling command."""

    def test_steady_session(self, tmp_path, capsys):
        rows = [
            {"timestamp_offset_seconds": i * 60, "heart_rate": 140, "power_watts": 200}
            for i in range(20)
        ]
        main(["decoupling", "--samples", _write_json(tmp_path, "session.json", rows)])
        output = capsys.readouterr().out
        assert "0.0%" in output
        assert "Well coupled" in output

    def test_too_few_samples(self, tmp_path, capsys):
        rows = [{"timestamp_offset_seconds": 0, "heart_rate": 140, "power_watts": 200}]
        main(["decoupling", "--samples", _write_json(tmp_path, "short.json", rows)])
        assert "Not enough samples" in capsys.readouterr().out


class TestPlanCommand:
    """Tests for the plan command."""

    def test_json_output(self, workouts_file, capsys):
        main([
            "plan", "--workouts", workouts_file, "--distance", "olympic",
            "--goal", "pr", "--name", "City Tri", "--temp-high", "30", "--json",
        ])
        plan = json.loads(capsys.readouterr().out)
        assert plan["race_distance"] == "olympic"
        assert plan["race_name"] == "City Tri"
        assert plan["conditions"]["temp_high_c"] == 30
        assert plan["mindset_plan"]["pro_tactics"] is None

    def test_summary_with_qualification(self, workouts_file, capsys):
        main([
            "plan", "--workouts", workouts_file, "--distance", "70.3",
            "--goal", "qualify_im_703_worlds", "--gender", "female", "--age-group", "35-39",
        ])
        output = capsys.readouterr().out
        assert "Race Plan" in output
        assert "Pacing" in output
        assert "IRONMAN 70.3 World Championship" in output
