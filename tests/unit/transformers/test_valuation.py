"""Unit tests for capital-budgeting primitives."""

import pytest

pytestmark = pytest.mark.fast

from roai.transformers.valuation import (
    calculate_bcr,
    calculate_irr,
    calculate_npv,
    calculate_payback_period,
    has_payback,
)


class TestCalculateNPV:
    """Tests for calculate_npv."""

    def test_calculate_npv(self):
        """Test NPV of a standard outlay followed by returns."""
        npv = calculate_npv([-100000, 50000, 100000], 0.10)

        assert npv == pytest.approx(28099.17, abs=0.01)

    def test_zero_discount_rate_is_plain_sum(self):
        """Test NPV at a zero rate equals the undiscounted sum."""
        assert calculate_npv([-100000, 50000, 100000], 0.0) == 50000

    def test_empty_cash_flows(self):
        """Test NPV of no cash flows is zero."""
        assert calculate_npv([], 0.10) == 0.0

    def test_year_zero_is_not_discounted(self):
        """Test a single year-0 amount is returned unchanged."""
        assert calculate_npv([12345.0], 0.25) == 12345.0


class TestCalculateIRR:
    """Tests for calculate_irr."""

    def test_calculate_irr(self):
        """Test IRR for a standard investment profile."""
        cash_flows = [-100000, 50000, 100000]

        irr = calculate_irr(cash_flows)

        assert irr == pytest.approx(0.281, abs=0.005)
        assert abs(calculate_npv(cash_flows, irr)) < 1e-4

    def test_zero_cash_flows(self):
        """Test all-zero cash flows yield an IRR of zero."""
        assert calculate_irr([0, 0, 0]) == 0.0

    def test_empty_cash_flows(self):
        """Test an empty sequence yields an IRR of zero."""
        assert calculate_irr([]) == 0.0

    def test_negative_irr(self):
        """Test an investment that never pays back has a negative IRR."""
        irr = calculate_irr([-100000, 20000, 20000])

        assert irr < 0
        assert irr >= -0.99

    def test_very_high_irr(self):
        """Test a very profitable investment returns a positive IRR."""
        assert calculate_irr([-1000, 1000000]) > 0

    def test_non_convergence_returns_last_estimate(self):
        """Test an exhausted iteration budget still returns a number."""
        irr = calculate_irr([-100000, 50000, 100000], max_iterations=1)

        assert isinstance(irr, float)
        assert irr != pytest.approx(0.281, abs=0.005)

    def test_long_sequence_at_rate_floor(self):
        """Test discount factors that underflow at the floor return the estimate."""
        cash_flows = [1000.0] + [-1.0] * 199

        irr = calculate_irr(cash_flows)

        assert irr == pytest.approx(-0.99)

    def test_rate_floor_is_respected(self):
        """Test iteration never goes below the configured floor."""
        irr = calculate_irr([-100000, 1000, 1000], max_iterations=1, rate_floor=-0.5)

        assert irr >= -0.5


class TestCalculatePaybackPeriod:
    """Tests for calculate_payback_period."""

    def test_calculate_payback_period(self):
        """Test payback interpolates inside the recovering year."""
        assert calculate_payback_period([-100000, 50000, 100000]) == pytest.approx(1.5)

    def test_immediate_payback(self):
        """Test a non-negative year 0 pays back immediately."""
        assert calculate_payback_period([100000, 0, 0]) == 0.0

    def test_never_pays_back(self):
        """Test the sentinel is the sequence length when never recovered."""
        cash_flows = [-100000, 20000, 20000]

        assert calculate_payback_period(cash_flows) == 3.0
        assert has_payback(cash_flows) is False

    def test_payback_on_last_year_is_distinguishable(self):
        """Test a payback landing at the end is reported as recovered."""
        cash_flows = [-100000, 0, 100000]

        assert calculate_payback_period(cash_flows) == pytest.approx(2.0)
        assert has_payback(cash_flows) is True

    def test_empty_sequence(self):
        """Test an empty sequence reports zero years and no payback."""
        assert calculate_payback_period([]) == 0.0
        assert has_payback([]) is False


class TestCalculateBCR:
    """Tests for calculate_bcr."""

    def test_calculate_bcr(self):
        """Test incremental benefit-cost ratio."""
        bcr = calculate_bcr(
            ai_benefits=[0, 80000, 120000],
            ai_costs=[100000, 50000, 50000],
            cf_benefits=[0, 30000, 40000],
            cf_costs=[20000, 20000, 20000],
            discount_rate=0.10,
        )

        assert bcr == pytest.approx(0.84, abs=0.01)

    def test_zero_incremental_cost_returns_zero(self):
        """Test identical cost streams give a BCR of zero."""
        bcr = calculate_bcr([0, 50000], [10000, 10000], [0, 0], [10000, 10000], 0.10)

        assert bcr == 0.0

    def test_cheaper_ai_plan_uses_absolute_cost(self):
        """Test negative incremental cost PV is divided by its magnitude."""
        bcr = calculate_bcr([100], [50], [0], [100], 0.0)

        assert bcr == pytest.approx(2.0)
