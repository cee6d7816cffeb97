"""
Tests for the record loader: one GET, verbatim records on success, a single
LoadError for every failure mode, and the DataFrame shaping used by the
pipeline.
"""

import math

import pytest
import requests

from kpi_dashboard.config import KPI_FIELDS
from kpi_dashboard.data.loader import (
    LOAD_ERROR_MESSAGE,
    DataLoader,
    LoadError,
    records_to_frame,
)

URL = "https://example.test/exec"


class TestDataLoader:
    def test_returns_records_verbatim(self, mock_session, make_response, north_record):
        mock_session.get.return_value = make_response([north_record])
        loader = DataLoader(URL, session=mock_session)

        assert loader.load() == [north_record]
        mock_session.get.assert_called_once_with(URL, timeout=None)

    def test_passes_configured_timeout(self, mock_session):
        DataLoader(URL, session=mock_session, timeout=7.5).load()
        mock_session.get.assert_called_once_with(URL, timeout=7.5)

    def test_non_success_status_raises_load_error(self, mock_session, make_response):
        mock_session.get.return_value = make_response([], status_code=500)

        with pytest.raises(LoadError) as exc_info:
            DataLoader(URL, session=mock_session).load()
        assert str(exc_info.value) == LOAD_ERROR_MESSAGE

    def test_not_found_raises_load_error(self, mock_session, make_response):
        mock_session.get.return_value = make_response(None, status_code=404)

        with pytest.raises(LoadError):
            DataLoader(URL, session=mock_session).load()

    def test_transport_error_is_wrapped(self, mock_session):
        cause = requests.ConnectionError("connection refused")
        mock_session.get.side_effect = cause

        with pytest.raises(LoadError) as exc_info:
            DataLoader(URL, session=mock_session).load()
        assert exc_info.value.__cause__ is cause
        assert str(exc_info.value) == LOAD_ERROR_MESSAGE

    def test_invalid_json_raises_load_error(self, mock_session, make_response):
        mock_session.get.return_value = make_response(json_error=ValueError("Expecting value"))

        with pytest.raises(LoadError):
            DataLoader(URL, session=mock_session).load()

    def test_non_array_body_raises_load_error(self, mock_session, make_response):
        mock_session.get.return_value = make_response({"error": "quota"})

        with pytest.raises(LoadError):
            DataLoader(URL, session=mock_session).load()

    @pytest.mark.parametrize("status_code", [204, 200])
    def test_2xx_statuses_succeed(self, mock_session, make_response, status_code):
        mock_session.get.return_value = make_response([], status_code=status_code)

        assert DataLoader(URL, session=mock_session).load() == []

    @pytest.mark.parametrize("status_code", [300, 302, 304])
    def test_redirect_statuses_raise_load_error(self, mock_session, make_response, north_record, status_code):
        mock_session.get.return_value = make_response([north_record], status_code=status_code)

        with pytest.raises(LoadError):
            DataLoader(URL, session=mock_session).load()

    def test_no_retry_after_failure(self, mock_session, make_response):
        mock_session.get.return_value = make_response([], status_code=503)

        with pytest.raises(LoadError):
            DataLoader(URL, session=mock_session).load()
        assert mock_session.get.call_count == 1


class TestRecordsToFrame:
    def test_columns_present_for_valid_records(self, sample_records):
        df = records_to_frame(sample_records)

        assert len(df) == len(sample_records)
        for col in ["name", "type", *KPI_FIELDS]:
            assert col in df.columns
        assert df.loc[0, "ProjectedRate"] == 80

    def test_empty_records_produce_empty_frame_with_columns(self):
        df = records_to_frame([])

        assert df.empty
        for col in ["name", "type", *KPI_FIELDS]:
            assert col in df.columns

    def test_malformed_kpis_become_nan(self):
        df = records_to_frame([{"name": "X", "type": "region", "ProjectedRate": "n/a"}])

        assert math.isnan(df.loc[0, "ProjectedRate"])
        assert math.isnan(df.loc[0, "CleanDashboardRate"])

    def test_missing_name_and_type_become_empty_strings(self):
        df = records_to_frame([{"ProjectedRate": 50}])

        assert df.loc[0, "name"] == ""
        assert df.loc[0, "type"] == ""

    def test_non_object_elements_are_skipped(self, caplog):
        records = [{"name": "North", "type": "region", "ProjectedRate": 80}, None, 5, "x"]

        with caplog.at_level("WARNING", logger="kpi_dashboard.data.loader"):
            df = records_to_frame(records)

        assert df["name"].tolist() == ["North"]
        assert df.loc[0, "ProjectedRate"] == 80
        assert "Skipped 3 feed elements" in caplog.text

    def test_only_non_object_elements_produce_empty_frame(self):
        df = records_to_frame([None, 1, "x"])

        assert df.empty
        for col in ["name", "type", *KPI_FIELDS]:
            assert col in df.columns

    def test_list_valued_kpi_becomes_nan(self):
        df = records_to_frame([{"name": "X", "type": "region", "ProjectedRate": [1, 2]}])

        assert math.isnan(df.loc[0, "ProjectedRate"])
