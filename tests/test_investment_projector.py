import pytest
from goalplanner.core.errors import InvalidArgument
from goalplanner.services.investment_projector import InvestmentProjector
from goalplanner.services.time_value import compound_growth, future_value_of_annuity


@pytest.fixture
def projector():
    return InvestmentProjector()


def test_projection_components(projector):
    p = projector.project(200000, 5000, 2, 12, 10)
    assert p.projected_existing_value == pytest.approx(compound_growth(200000, 12, 10))
    assert p.contributions_to_date_value == pytest.approx(compound_growth(120000, 12, 10))
    assert p.remaining_contribution_months == 96
    assert p.continuing_contribution_value == pytest.approx(future_value_of_annuity(5000, 12, 96))
    assert p.projected_value == pytest.approx(p.projected_existing_value + p.projected_contribution_value)


def test_zero_horizon_degenerates_to_present_values(projector):
    p = projector.project(100000, 5000, 2, 12, 0)
    assert p.projected_existing_value == 100000
    assert p.continuing_contribution_value == 0
    assert p.projected_value == pytest.approx(220000)


def test_elapsed_beyond_horizon_floors_remaining_months(projector):
    p = projector.project(0, 1000, 12, 12, 5)
    assert p.remaining_contribution_months == 0
    assert p.continuing_contribution_value == 0


def test_no_contribution_means_no_contribution_value(projector):
    p = projector.project(50000, 0, 3, 12, 10)
    assert p.projected_contribution_value == 0


def test_portfolio_strength_tables(projector):
    assert projector.portfolio_strength(0, 0, 0) == 0
    assert projector.portfolio_strength(100000, 5000, 2) == 40
    assert projector.portfolio_strength(1000000, 20000, 5) == 100
    assert projector.portfolio_strength(50, 0, 0) == 5
    assert projector.portfolio_strength(0, 100, 0) == 10


@pytest.mark.parametrize("axis", ["existing", "contribution", "duration"])
def test_portfolio_strength_is_monotonic(projector, axis):
    base = {"existing": 200000, "contribution": 4000, "duration": 1}
    steps = {
        "existing": [0, 1, 99999, 100000, 500000, 1000000, 5000000],
        "contribution": [0, 1, 4999, 5000, 10000, 20000, 50000],
        "duration": [0, 0.5, 1, 2, 3, 5, 10],
    }[axis]
    scores = []
    for value in steps:
        args = dict(base, **{axis: value})
        scores.append(projector.portfolio_strength(args["existing"], args["contribution"], args["duration"]))
    assert scores == sorted(scores)
    assert all(0 <= s <= 100 for s in scores)


def test_sip_efficiency(projector):
    assert projector.sip_efficiency_pct(0, 100000, 3) == 0
    assert projector.sip_efficiency_pct(1000, 100000, 0) == 0
    assert projector.sip_efficiency_pct(1000, 24000, 1) == pytest.approx(100)


def test_negative_inputs_rejected(projector):
    with pytest.raises(InvalidArgument):
        projector.project(-1, 0, 0, 12, 10)
    with pytest.raises(InvalidArgument):
        projector.project(0, 0, -1, 12, 10)
