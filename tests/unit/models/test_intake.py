"""Unit tests for intake records and their conversion to engine inputs."""

import copy

import pytest

pytestmark = pytest.mark.fast

from roai.exceptions import ErrorCode, InvalidInputError
from roai.models.intake import CounterfactualType, InitiativeSubmission, LineItem
from roai.transformers.cash_flows import build_incremental_cash_flows


class TestInitiativeSubmission:
    """Tests for InitiativeSubmission validation."""

    def test_from_mapping(self, support_copilot_payload):
        """Test the example initiative validates."""
        submission = InitiativeSubmission.from_mapping(support_copilot_payload)

        assert submission.profile.name == "Customer Support AI Copilot"
        assert submission.profile.counterfactual_type is CounterfactualType.MANUAL_IMPROVEMENT
        assert len(submission.costs) == 18
        assert len(submission.benefits) == 12

    def test_profile_defaults(self, support_copilot_payload):
        """Test currency, region, horizon and rate defaults."""
        payload = copy.deepcopy(support_copilot_payload)
        for key in ("currency", "region", "horizon_years", "discount_rate"):
            payload["profile"].pop(key)

        profile = InitiativeSubmission.from_mapping(payload).profile

        assert (profile.currency, profile.region) == ("USD", "US")
        assert profile.horizon_years == 3
        assert profile.discount_rate == 0.10

    def test_invalid_email(self, support_copilot_payload):
        """Test a malformed owner email is reported with its location."""
        payload = copy.deepcopy(support_copilot_payload)
        payload["profile"]["owner_email"] = "not-an-email"

        with pytest.raises(InvalidInputError) as exc_info:
            InitiativeSubmission.from_mapping(payload)

        assert exc_info.value.status_code == ErrorCode.SCHEMA_MISMATCH
        assert any(v.startswith("profile.owner_email") for v in exc_info.value.violations)

    def test_collects_every_violation(self, support_copilot_payload):
        """Test all problems are reported at once."""
        payload = copy.deepcopy(support_copilot_payload)
        payload["profile"]["summary"] = "short"
        payload["profile"]["horizon_years"] = 9
        payload["risk"]["p_success"] = 1.5
        payload["costs"][0]["amount"] = -1

        with pytest.raises(InvalidInputError) as exc_info:
            InitiativeSubmission.from_mapping(payload)

        locations = {v.split(":")[0] for v in exc_info.value.violations}
        assert locations == {"profile.summary", "profile.horizon_years", "risk.p_success", "costs.0.amount"}

    def test_risk_rating_range(self, support_copilot_payload):
        payload = copy.deepcopy(support_copilot_payload)
        payload["risk"]["vendor_risk"] = 6

        with pytest.raises(InvalidInputError):
            InitiativeSubmission.from_mapping(payload)

    def test_unknown_counterfactual_type(self, support_copilot_payload):
        payload = copy.deepcopy(support_copilot_payload)
        payload["profile"]["counterfactual_type"] = "outsourcing"

        with pytest.raises(InvalidInputError):
            InitiativeSubmission.from_mapping(payload)


class TestToEngineInputs:
    """Tests for InitiativeSubmission.to_engine_inputs."""

    def test_aggregates_by_year(self, support_copilot_payload):
        """Test line items are summed into one entry per year."""
        submission = InitiativeSubmission.from_mapping(support_copilot_payload)

        data, risk = submission.to_engine_inputs()

        assert data.cost_amounts == [360000, 160000, 160000]
        assert data.benefit_amounts == [281200, 562400, 818400]
        assert data.cf_cost_amounts == [390000, 210000, 210000]
        assert data.cf_benefit_amounts == [100000, 200000, 300000]
        assert [e.year for e in data.costs] == [0, 1, 2]
        assert data.horizon_years == 3
        assert data.discount_rate == 0.10
        assert risk.p_success == 0.75
        assert risk.vendor_risk == 2

    def test_incremental_flows_of_example(self, support_copilot_payload):
        """Test the example's incremental flows after aggregation."""
        data, _ = InitiativeSubmission.from_mapping(support_copilot_payload).to_engine_inputs()

        assert build_incremental_cash_flows(data) == [211200, 412400, 568400]

    def test_missing_years_are_zero(self, support_copilot_payload):
        """Test years without items still occupy their position."""
        payload = copy.deepcopy(support_copilot_payload)
        payload["benefits"] = [{"label": "Late gains", "category": "productivity", "year": 2, "amount": 500}]

        data, _ = InitiativeSubmission.from_mapping(payload).to_engine_inputs()

        assert data.benefit_amounts == [0.0, 0.0, 500.0]
        assert data.cf_benefit_amounts == [0.0, 0.0, 0.0]

    def test_items_beyond_horizon_dropped(self, support_copilot_payload):
        """Test items past the horizon do not reach the engine."""
        payload = copy.deepcopy(support_copilot_payload)
        payload["costs"].append({"label": "Year 4 licence", "category": "license", "year": 4, "amount": 99999})

        data, _ = InitiativeSubmission.from_mapping(payload).to_engine_inputs()

        assert data.cost_amounts == [360000, 160000, 160000]

    def test_positional_pass_through(self, support_copilot_payload):
        """Test raw line items keep submission order without aggregation."""
        submission = InitiativeSubmission.from_mapping(support_copilot_payload)

        data, _ = submission.to_engine_inputs(aggregate_by_year=False)

        assert len(data.costs) == 12
        assert len(data.cf_costs) == 6
        assert data.cost_amounts[:3] == [80000, 80000, 80000]
        assert [e.year for e in data.costs[:4]] == [0, 1, 2, 0]


class TestLineItem:
    """Tests for LineItem."""

    def test_defaults_to_ai_plan(self):
        item = LineItem(label="Licence", category="license", year=0, amount=10)

        assert item.is_counterfactual is False

    def test_year_range(self):
        with pytest.raises(ValueError):
            LineItem(label="Licence", category="license", year=11, amount=10)
