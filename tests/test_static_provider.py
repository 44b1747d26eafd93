#!/usr/bin/env python3
"""Tests for the offline advisory provider."""

from datetime import datetime, timezone

import pytest

from carservice import FuelType, ServiceArea
from carservice.advisory import StaticAdvisoryProvider, VehicleContext
from carservice.advisory.static import DISCLAIMER, SOURCES, build_bullets, oil_bullets


def fixed_clock():
    return datetime(2025, 6, 1, tzinfo=timezone.utc)


class TestOilBullets:
    """Tests for engine oil text by fuel type and age."""

    def test_electric_not_applicable(self):
        assert oil_bullets(FuelType.ELECTRIC, 3) == ["Engine oil: not applicable to electric vehicles."]

    def test_petrol_new(self):
        bullets = oil_bullets(FuelType.PETROL, 5)
        assert len(bullets) == 2
        assert bullets[0].startswith("Engine oil:")

    def test_old_vehicle_line(self):
        assert any("Older vehicles" in b for b in oil_bullets(FuelType.PETROL, 12))
        assert not any("Older vehicles" in b for b in oil_bullets(FuelType.PETROL, 11))

    def test_diesel_line(self):
        assert any(b.startswith("Diesel:") for b in oil_bullets(FuelType.DIESEL, 5))


class TestBuildBullets:
    """Tests for build_bullets."""

    @pytest.mark.parametrize("area", [a for a in ServiceArea if a is not ServiceArea.ENGINE_OIL])
    def test_every_area_has_text(self, area):
        assert build_bullets(area, FuelType.PETROL, 5)

    def test_returns_copy(self):
        bullets = build_bullets(ServiceArea.BATTERY, FuelType.PETROL, 5)
        bullets.append("x")
        assert "x" not in build_bullets(ServiceArea.BATTERY, FuelType.PETROL, 5)


@pytest.mark.asyncio
class TestStaticAdvisoryProvider:
    """Tests for StaticAdvisoryProvider.get_advice."""

    async def test_electric_engine_oil(self):
        provider = StaticAdvisoryProvider(clock=fixed_clock)
        vehicle = VehicleContext(1, "Nissan", "Leaf", 2019, FuelType.ELECTRIC)

        result = await provider.get_advice(vehicle, ServiceArea.ENGINE_OIL)

        assert result.key_intervals == ["Engine oil: not applicable to electric vehicles."]

    async def test_summary_sources_and_note(self):
        provider = StaticAdvisoryProvider(clock=fixed_clock)
        vehicle = VehicleContext(2, "Skoda", "Octavia", 2012, FuelType.DIESEL)

        result = await provider.get_advice(vehicle, ServiceArea.ENGINE_OIL)

        assert result.summary == (
            "Estimated service intervals: Skoda Octavia (2012), Diesel, area: Engine oil"
        )
        assert result.sources == SOURCES
        assert result.safety_note == DISCLAIMER
        # 13 years old and diesel
        assert any("Older vehicles" in b for b in result.key_intervals)
        assert any(b.startswith("Diesel:") for b in result.key_intervals)

    async def test_future_model_year_counts_as_new(self):
        provider = StaticAdvisoryProvider(clock=fixed_clock)
        vehicle = VehicleContext(3, "Toyota", "Corolla", 2026, FuelType.PETROL)

        result = await provider.get_advice(vehicle, ServiceArea.ENGINE_OIL)

        assert not any("Older vehicles" in b for b in result.key_intervals)
