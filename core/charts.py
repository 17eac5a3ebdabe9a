from __future__ import annotations

from typing import Any, Dict, Iterable

import altair as alt
import pandas as pd

from core.models import Statistics, TimeSeriesPoint

alt.data_transformers.disable_max_rows()

STATISTICS_CATEGORIES = ["Total Products", "Total Quantity", "Average Price"]


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def series_frame(points: Iterable[TimeSeriesPoint]) -> pd.DataFrame:
    rows = [{"seq": i, "x": p.x, "y": p.y} for i, p in enumerate(points)]
    if not rows:
        return pd.DataFrame({"seq": pd.Series(dtype=int), "x": pd.Series(dtype="datetime64[ns]"), "y": pd.Series(dtype=float)})
    return pd.DataFrame(rows)


def line_chart(points: Iterable[TimeSeriesPoint], height: int = 350) -> alt.Chart:
    # `order` keeps the server's ordering instead of letting Vega-Lite sort by x
    df = series_frame(points)
    return (
        alt.Chart(df)
        .mark_line(interpolate="monotone", strokeWidth=2)
        .encode(
            x=alt.X("x:T", title=None),
            y=alt.Y("y:Q", title="Value"),
            order=alt.Order("seq:Q"),
            tooltip=[
                alt.Tooltip("x:T", title="Date", format="%d %b %Y"),
                alt.Tooltip("y:Q", title="Value", format=","),
            ],
        )
        .properties(height=height)
    )


def statistics_bar_chart(stats: Statistics, height: int = 350) -> alt.Chart:
    df = pd.DataFrame(
        {
            "category": STATISTICS_CATEGORIES,
            "value": [stats.total_products, stats.total_quantity, stats.average_price],
        }
    )
    return (
        alt.Chart(df)
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("category:N", title=None, sort=STATISTICS_CATEGORIES),
            y=alt.Y("value:Q", title="Count"),
            tooltip=["category", alt.Tooltip("value:Q", format=",")],
        )
        .properties(height=height)
    )
