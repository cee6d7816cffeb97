"""
Fetch KPI records from the remote endpoint and shape them for the pipeline.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import requests

from kpi_dashboard.config import KPI_FIELDS

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load data. Please try again later."

Record = Dict[str, Any]


class LoadError(Exception):
    """The record feed could not be fetched or parsed."""

    def __init__(self, message: str = LOAD_ERROR_MESSAGE) -> None:
        super().__init__(message)


class DataLoader:
    """Issues one GET against ``url`` per call to :meth:`load`.

    ``session`` is injectable so tests (and callers that want connection
    pooling) can supply their own ``requests.Session``. ``timeout=None``
    leaves the transport default in place.
    """

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def load(self) -> List[Record]:
        logger.info("Fetching KPI records from %s", self.url)
        try:
            response = self._session.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Error fetching data: %s", exc)
            raise LoadError() from exc

        if not 200 <= response.status_code < 300:
            logger.error(
                "Error fetching data: HTTP %s from %s", response.status_code, self.url
            )
            raise LoadError()

        try:
            payload = response.json()
        except ValueError as exc:
            # requests' JSONDecodeError subclasses ValueError
            logger.error("Error fetching data: response body is not JSON (%s)", exc)
            raise LoadError() from exc

        if not isinstance(payload, list):
            logger.error(
                "Error fetching data: expected a JSON array, got %s", type(payload).__name__
            )
            raise LoadError()

        logger.info("Loaded %d KPI records", len(payload))
        return payload


def records_to_frame(records: List[Record]) -> pd.DataFrame:
    """Build the pipeline DataFrame from raw records.

    Elements that are not JSON objects are skipped. Missing KPI columns are
    added as NaN and non-numeric KPI values are coerced to NaN, so malformed
    rows flow through aggregation as NaN instead of being rejected. Missing
    ``name``/``type`` become empty strings, which places the row in no
    category.
    """
    rows = [r for r in records if isinstance(r, dict)]
    dropped = len(records) - len(rows)
    if dropped:
        logger.warning("Skipped %d feed elements that are not objects", dropped)
    df = pd.DataFrame.from_records(rows) if rows else pd.DataFrame()

    for col in ("name", "type"):
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].fillna("").astype(str)

    for col in KPI_FIELDS:
        if col not in df.columns:
            df[col] = np.nan
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    return df.reset_index(drop=True)
