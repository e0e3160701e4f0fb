"""Tests for the Sacramento storage update functions.

Expected values are computed by hand from the update equations.
"""

import pytest

from sacramento.model.processes import (
    direct_routing_update,
    groundwater_update,
    interception_store_update,
    soil_store_update,
)


class TestInterceptionStoreUpdate:
    """Tests for interception_store_update()."""

    def test_overflow_above_threshold(self) -> None:
        """Rain beyond the threshold overflows after evaporation."""
        s, es, er, is_ = interception_store_update(0.0, 10.0, 2.0, 5.0)

        assert es == pytest.approx(2.0)
        assert er == pytest.approx(0.0)
        assert is_ == pytest.approx(3.0)
        assert s == pytest.approx(5.0)

    def test_demand_exceeds_store(self) -> None:
        """Evaporation empties the store and passes the rest of the demand on."""
        s, es, er, is_ = interception_store_update(1.0, 0.0, 3.0, 5.0)

        assert s == 0.0
        assert es == pytest.approx(1.0)
        assert er == pytest.approx(2.0)
        assert is_ == 0.0

    def test_below_threshold_keeps_water(self) -> None:
        """No overflow while the store stays under the threshold."""
        s, es, er, is_ = interception_store_update(1.0, 2.0, 0.5, 5.0)

        assert s == pytest.approx(2.5)
        assert is_ == 0.0


class TestSoilStoreUpdate:
    """Tests for soil_store_update()."""

    def test_infiltration_and_interflow(self) -> None:
        """Empty ground store: infiltration limited by x5 * T / x4."""
        t, it, qt1, et, ez, qt0 = soil_store_update(0.0, 3.0, 0.0, 0.0, 50.0, 20.0, 4.0, 3.0)

        assert it == pytest.approx(0.6)
        assert qt1 == pytest.approx(0.8)
        assert et == 0.0
        assert ez == 0.0
        assert qt0 == 0.0
        assert t == pytest.approx(1.6)

    def test_evaporation_scaled_by_fill(self) -> None:
        """Soil evaporation is the residual demand times T / x4."""
        t, it, qt1, et, ez, qt0 = soil_store_update(30.0, 0.0, 5.0, 25.0, 50.0, 20.0, 4.0, 3.0)

        assert it == pytest.approx(3.0)
        assert qt1 == pytest.approx(9.0)
        assert et == pytest.approx(4.5)
        assert ez == pytest.approx(0.5)
        assert qt0 == 0.0
        assert t == pytest.approx(13.5)

    def test_overflow_caps_store_at_x4(self) -> None:
        """Water above x4 overflows to direct routing."""
        t, it, qt1, et, ez, qt0 = soil_store_update(100.0, 0.0, 0.0, 50.0, 50.0, 20.0, 4.0, 3.0)

        assert it == 0.0  # Ground store full
        assert qt1 == pytest.approx(100.0 / 3.0)
        assert qt0 == pytest.approx(140.0 / 3.0)
        assert t == pytest.approx(20.0)

    def test_no_infiltration_when_ground_store_over_capacity(self) -> None:
        """A ground store above x2 gives a negative rate, clamped to zero."""
        _, it, _, _, _, _ = soil_store_update(10.0, 0.0, 0.0, 60.0, 50.0, 20.0, 4.0, 3.0)

        assert it == 0.0

    def test_infiltration_capped_by_store(self) -> None:
        """Infiltration never exceeds the water in T."""
        t, it, _, _, _, _ = soil_store_update(0.0, 2.0, 0.0, 0.0, 50.0, 1.0, 100.0, 3.0)

        assert it == pytest.approx(2.0)
        assert t == 0.0


class TestGroundwaterUpdate:
    """Tests for groundwater_update()."""

    def test_partition_and_discharge(self) -> None:
        """Infiltration split by x7, R drains by R / x3."""
        l_store, r, il, el, ir, qr = groundwater_update(0.0, 0.0, 0.6, 0.0, 50.0, 5.0, 0.3, 1.0, 5.0, 10.0)

        assert l_store == pytest.approx(0.18)
        assert r == pytest.approx(0.336)
        assert il == 0.0
        assert el == 0.0
        assert ir == 0.0
        assert qr == pytest.approx(0.084)

    def test_l_overflow_goes_to_r(self) -> None:
        """L above xf2 spills into R before R drains."""
        l_store, r, il, _, _, qr = groundwater_update(9.9, 0.0, 1.0, 0.0, 50.0, 5.0, 0.3, 1.0, 5.0, 10.0)

        assert il == pytest.approx(0.2)
        assert l_store == pytest.approx(10.0)
        assert qr == pytest.approx(0.18)
        assert r == pytest.approx(0.72)

    def test_deep_percolation_divides_discharge_only(self) -> None:
        """x8 scales the discharge but not what is removed from R."""
        _, r, _, _, _, qr = groundwater_update(9.9, 0.0, 1.0, 0.0, 50.0, 5.0, 0.3, 2.0, 5.0, 10.0)

        assert qr == pytest.approx(0.09)
        assert r == pytest.approx(0.72)

    def test_negative_l_reclaimed_from_r_slack(self) -> None:
        """Deep loss deficit is taken from R above x2 - xf2."""
        l_store, r, _, el, ir, qr = groundwater_update(0.1, 45.0, 0.0, 30.0, 50.0, 5.0, 0.3, 1.0, 5.0, 10.0)

        assert el == pytest.approx(2.0)
        assert ir == pytest.approx(1.9)
        assert l_store == pytest.approx(0.0)
        assert qr == pytest.approx(8.62)
        assert r == pytest.approx(34.48)

    def test_partial_slack_floors_l(self) -> None:
        """R covers part of the deficit; L is floored at zero."""
        l_store, r, _, _, ir, qr = groundwater_update(0.1, 41.0, 0.0, 30.0, 50.0, 5.0, 0.3, 1.0, 5.0, 10.0)

        assert ir == pytest.approx(1.0)
        assert l_store == 0.0
        assert qr == pytest.approx(8.0)
        assert r == pytest.approx(32.0)

    def test_no_slack_leaves_r_untouched(self) -> None:
        """R below x2 - xf2 gives nothing back; L is still floored."""
        l_store, r, _, _, ir, qr = groundwater_update(0.1, 38.0, 0.0, 30.0, 50.0, 5.0, 0.3, 1.0, 5.0, 10.0)

        assert ir == 0.0
        assert l_store == 0.0
        assert qr == pytest.approx(7.6)
        assert r == pytest.approx(30.4)


class TestDirectRoutingUpdate:
    """Tests for direct_routing_update()."""

    def test_linear_emptying(self) -> None:
        """M empties by M / x1 after receiving the soil overflow."""
        m, qm = direct_routing_update(0.0, 10.0, 10.0)

        assert qm == pytest.approx(1.0)
        assert m == pytest.approx(9.0)

    def test_existing_storage_drains(self) -> None:
        """Stored water drains even without inflow."""
        m, qm = direct_routing_update(5.0, 0.0, 2.0)

        assert qm == pytest.approx(2.5)
        assert m == pytest.approx(2.5)
