import json

import pytest

from solarglobe.cli import main


@pytest.fixture
def cities_file(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(
        json.dumps(
            [
                {"name": "CityA", "lat": 0, "lon": 0, "population": 1, "timezone": "Europe/London", "country": "X"},
                {"name": "CityB", "lat": 0, "lon": 180, "population": 1, "timezone": "Pacific/Fiji", "country": "Y"},
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_find_match(cities_file, capsys):
    code = main(["find", "00:05", "--at", "2024-03-20T12:00:00", "--cities", str(cities_file)])
    out = capsys.readouterr().out
    assert code == 0
    assert "FOUND: CityB, Y (diff 5.0 min)" in out
    assert "Pacific/Fiji" in out


def test_find_fallback(cities_file, capsys):
    code = main(["find", "18:00", "--at", "2024-03-20T12:00:00", "--cities", str(cities_file)])
    assert code == 0
    assert "approx LON 90" in capsys.readouterr().out


def test_find_rejects_bad_time(cities_file, capsys):
    code = main(["find", "25:00", "--cities", str(cities_file)])
    assert code == 1
    assert "hour" in capsys.readouterr().err


def test_find_missing_dataset(tmp_path, capsys):
    code = main(["find", "12:00", "--cities", str(tmp_path / "none.json")])
    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_sun(capsys):
    assert main(["sun", "--at", "2000-01-01T12:00:00"]) == 0
    out = capsys.readouterr().out
    assert "Declination     -23.0" in out
    assert "Equation of time -3.3" in out


def test_render(tmp_path, cities_file, capsys):
    output = tmp_path / "map.png"
    assert main(["render", "--at", "2024-03-20T12:00:00", "--cities", str(cities_file), "--output", str(output)]) == 0
    assert output.exists()
    assert "Saved:" in capsys.readouterr().out


def test_bad_config(monkeypatch, capsys):
    monkeypatch.setenv("SOLARGLOBE_MATCH_TOLERANCE", "lots")
    assert main(["sun"]) == 2
    assert "SOLARGLOBE_MATCH_TOLERANCE" in capsys.readouterr().err
