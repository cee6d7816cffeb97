"""
Shared fixtures for the KPI dashboard tests.

Provides sample records shaped like the live feed, the matching pipeline
DataFrame, and a factory for fake ``requests`` responses so the loader can be
exercised without network access.
"""

from typing import Any, Dict, List
from unittest.mock import Mock

import pytest

from kpi_dashboard.data.loader import records_to_frame


def make_record(name: str, record_type: str, **rates: float) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "name": name,
        "type": record_type,
        "ProjectedRate": 90,
        "ClientExperienceRate": 90,
        "NextStepsRate": 90,
        "NextTriggerRate": 90,
        "CleanDashboardRate": 90,
    }
    record.update(rates)
    return record


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    return [
        make_record("North", "region", ProjectedRate=80, CleanDashboardRate=70),
        make_record("South", "region", ProjectedRate=95, ClientExperienceRate=86),
        make_record("East", "region", ProjectedRate=88),
        make_record("Northwest", "region", ProjectedRate=83),
        make_record("Alice Park", "paralegal", ProjectedRate=92),
        make_record("Ben North", "paralegal", ProjectedRate=70),
        make_record("Carla Diaz", "attorney", ProjectedRate=85),
        make_record("Orphan", "partner", ProjectedRate=10),
    ]


@pytest.fixture
def records_df(sample_records):
    return records_to_frame(sample_records)


@pytest.fixture
def north_record() -> Dict[str, Any]:
    return {
        "name": "North",
        "type": "region",
        "ProjectedRate": 80,
        "ClientExperienceRate": 90,
        "NextStepsRate": 85,
        "NextTriggerRate": 95,
        "CleanDashboardRate": 70,
    }


@pytest.fixture
def make_response():
    """Build a stand-in for ``requests.Response``."""

    def _factory(payload: Any = None, status_code: int = 200, json_error: Exception | None = None) -> Mock:
        response = Mock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response

    return _factory


@pytest.fixture
def mock_session(make_response):
    session = Mock()
    session.get.return_value = make_response([])
    return session
