#!/usr/bin/env python3
"""Tests for maint CLI formatting, table helpers and commands."""

import pytest

from carservice import (
    DEFAULT_INTERVALS,
    Car,
    FuelType,
    ServiceArea,
    ServiceInterval,
    ServiceRecord,
    ServiceStatus,
    Vehicle,
    build,
    load_vehicle,
)
from carservice.advisory import AdvisoryResult, AdvisorySource
from maint import (
    format_advice,
    format_cost,
    format_km,
    format_last_done,
    make_history_table,
    make_intervals_table,
    make_status_table,
    main,
    truncate,
)

VEHICLE_YAML = """
id: 7
vehicle:
  brand: Toyota
  model: Corolla
  year: 2015
  fuelType: petrol
state:
  currentKm: 118500
  asOfDate: '2025-03-10'
records:
  - area: engine_oil
    date: '2024-11-01'
    km: 104000
    cost: 320
  - area: brake_fluid
    date: '2023-01-10'
"""


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "corolla.yaml"
    path.write_text(VEHICLE_YAML)
    return path


@pytest.fixture(autouse=True)
def offline_env(monkeypatch, tmp_path):
    """Keep commands away from any real config, API key or database."""
    for name in ("CARSERVICE_CONFIG", "CARSERVICE_AI_ENABLED", "GEMINI_API_KEY",
                 "GEMINI_MODEL", "CARSERVICE_DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Formatting helpers
# =============================================================================


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(118500) == "118,500"
        assert format_km(0) == "0"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatCost:
    """Tests for format_cost."""

    def test_formats_number(self):
        assert format_cost(320) == "320.00"
        assert format_cost(1250.5) == "1,250.50"

    def test_none_returns_dash(self):
        assert format_cost(None) == "-"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestFormatLastDone:
    """Tests for format_last_done."""

    def test_none(self):
        assert format_last_done(None) == "-"

    def test_date_and_km(self):
        record = ServiceRecord(ServiceArea.ENGINE_OIL, "2024-11-01", km=104000)
        assert format_last_done(record) == "2024-11-01 @ 104,000 km"

    def test_date_only(self):
        assert format_last_done(ServiceRecord(ServiceArea.BRAKE_FLUID, "2023-01-10")) == "2023-01-10"


# =============================================================================
# Table helpers
# =============================================================================


class TestMakeStatusTable:
    """Tests for make_status_table."""

    def test_empty_list_returns_empty_rows(self):
        vehicle = Vehicle(Car("Toyota", "Corolla", 2015, FuelType.PETROL))
        assert make_status_table([], vehicle, DEFAULT_INTERVALS) == []

    def test_single_row(self):
        vehicle = Vehicle(
            Car("Toyota", "Corolla", 2015, FuelType.PETROL),
            [ServiceRecord(ServiceArea.ENGINE_OIL, "2024-11-01", km=104000)],
        )
        item = build(ServiceArea.ENGINE_OIL, ServiceStatus.APPROACHING)
        rows = make_status_table([item], vehicle, DEFAULT_INTERVALS)
        assert rows == [
            ["Engine oil", "15,000 km / 12 mo", "2024-11-01 @ 104,000 km", item.description]
        ]


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_row(self):
        record = ServiceRecord(ServiceArea.AIR_FILTER, "2025-01-01", km=117000, notes="Mann", cost=80)
        assert make_history_table([record]) == [["2025-01-01", "117,000", "Air filter", "80.00", "Mann"]]

    def test_missing_fields(self):
        assert make_history_table([ServiceRecord(ServiceArea.BRAKES)]) == [["-", "-", "Brakes", "-", "-"]]


class TestMakeIntervalsTable:
    """Tests for make_intervals_table."""

    def test_rows(self):
        catalog = [
            ServiceInterval(ServiceArea.ENGINE_OIL, 15000, 2000, 12, 2),
            ServiceInterval(ServiceArea.BRAKES),
        ]
        assert make_intervals_table(catalog) == [
            ["Engine oil", "engine_oil", "15,000 km / 12 mo", "2,000 km / 2 mo"],
            ["Brakes", "brakes", "wear-based", "-"],
        ]


class TestFormatAdvice:
    """Tests for format_advice."""

    def test_lines(self):
        result = AdvisoryResult(
            summary="Title",
            key_intervals=["a", "b"],
            sources=[AdvisorySource("Manual", "https://example.com")],
            safety_note="Note",
        )
        assert format_advice(result) == [
            "Title", "", "a", "b", "", "Sources:", "  Manual: https://example.com", "", "Note",
        ]


# =============================================================================
# Commands
# =============================================================================


class TestCommands:
    """End-to-end tests through main()."""

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.yaml"), "status"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_status(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "status"]) == 0
        out = capsys.readouterr().out
        assert "Toyota Corolla (2015)" in out
        assert "DO NOW:" in out
        assert "CHECK SOON:" in out
        assert "Brake fluid" in out

    def test_history_filtered(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history", "--area", "engine_oil"]) == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Engine oil" in out

    def test_history_unknown_area(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history", "--area", "wipers"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_log_dry_run(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "log", "air_filter", "--km", "118500", "--dry-run"]) == 0
        assert len(load_vehicle(vehicle_file).records) == 2
        assert "dry run" in capsys.readouterr().out

    def test_log_saves(self, vehicle_file):
        args = [str(vehicle_file), "log", "air-filter", "--date", "2025-03-10", "--km", "118500"]
        assert main(args) == 0
        record = load_vehicle(vehicle_file).records[-1]
        assert record.area is ServiceArea.AIR_FILTER
        assert record.date == "2025-03-10"

    def test_update_km(self, vehicle_file):
        assert main([str(vehicle_file), "update-km", "121000", "--date", "2025-04-01"]) == 0
        vehicle = load_vehicle(vehicle_file)
        assert vehicle.current_km == 121000
        assert vehicle.as_of_date == "2025-04-01"

    def test_intervals_uses_config(self, vehicle_file, tmp_path, capsys):
        config = tmp_path / "carservice.yaml"
        config.write_text("intervals:\n  engine_oil:\n    everyKm: 10000\n")
        assert main([str(vehicle_file), "--config", str(config), "intervals"]) == 0
        assert "10,000 km / 12 mo" in capsys.readouterr().out

    def test_invalid_config(self, vehicle_file, tmp_path, capsys):
        config = tmp_path / "carservice.yaml"
        config.write_text("colour: red\n")
        assert main([str(vehicle_file), "--config", str(config), "status"]) == 1
        assert "Invalid config" in capsys.readouterr().out

    def test_advice_offline(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "advice", "engine_oil", "--offline"]) == 0
        out = capsys.readouterr().out
        assert "Estimated service intervals: Toyota Corolla (2015)" in out
        assert "Sources:" in out

    def test_advice_ai_disabled_uses_static_provider(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "advice", "brake_fluid"]) == 0
        assert "Brake fluid: most often every 24 months" in capsys.readouterr().out
