from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from kpi_dashboard.data.pipeline import SelectionState


@dataclass
class PageContext:
    records_df: pd.DataFrame
    selection: SelectionState
