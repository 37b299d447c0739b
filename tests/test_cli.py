"""Tests for the mission-report command line."""

import json
import os

from click.testing import CliRunner

from mission_report.cli import main

from conftest import make_png


def write_mission(path, rounds):
    payload = {
        "pilotName": "Jane Doe",
        "instructorName": "John Roe",
        "date": "15/03/2024",
        "missionType": "Air Combat",
        "aircraft": "Rafale",
        "rounds": rounds,
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestGenerateCommand:
    def test_generates_report_with_relative_chart(self, tmp_path):
        (tmp_path / "round1.png").write_bytes(make_png(300, 150))
        mission = write_mission(tmp_path / "mission.json", [
            {"graphic": "round1.png", "shots": [
                {"number": 1, "speed": 350, "altitude": 1200, "distance": 800, "hit": True},
            ]},
        ])
        out_dir = tmp_path / "reports"

        result = CliRunner().invoke(main, ["generate", str(mission), "-o", str(out_dir), "--prefix", "Rapport"])

        assert result.exit_code == 0, result.output
        expected = os.path.join(str(out_dir), "Rapport_Jane_Doe_Air_Combat_20240315.pdf")
        assert expected in result.output
        assert os.path.exists(expected)
        assert "round 1 chart" not in result.output

    def test_reports_placeholders(self, tmp_path):
        mission = write_mission(tmp_path / "mission.json", [{"graphic": "gone.png", "shots": []}])
        result = CliRunner().invoke(main, ["generate", str(mission), "-o", str(tmp_path / "out")])
        assert result.exit_code == 0, result.output
        assert "placeholder: round 1 chart" in result.output

    def test_zero_rounds_is_an_error(self, tmp_path):
        mission = write_mission(tmp_path / "mission.json", [])
        result = CliRunner().invoke(main, ["generate", str(mission), "-o", str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "at least one round" in result.output
        assert not (tmp_path / "out").exists()

    def test_invalid_json(self, tmp_path):
        bad = tmp_path / "mission.json"
        bad.write_text("{not json", encoding="utf-8")
        result = CliRunner().invoke(main, ["generate", str(bad)])
        assert result.exit_code == 1
        assert "Cannot read" in result.output
