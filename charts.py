from __future__ import annotations
from typing import Dict, List
import pandas as pd
import altair as alt

from aggregation import Aggregate, stacked_to_frame, to_frame
from dashboards import color_for
from terminals import terminal_color

def _with_colors(data: pd.DataFrame) -> pd.DataFrame:
    data = data.copy()
    data["color"] = data["label"].map(color_for)
    return data

def donut_chart(aggs: List[Aggregate]) -> alt.Chart:
    data = _with_colors(to_frame(aggs))
    data = data[data["value"] > 0]
    return (
        alt.Chart(data)
        .mark_arc(innerRadius=45)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("label:N", scale=alt.Scale(domain=list(data["label"]), range=list(data["color"])),
                            legend=alt.Legend(title=None)),
            tooltip=["label", "value"],
        )
    )

def bar_chart(aggs: List[Aggregate], value_title: str = "Shipments") -> alt.Chart:
    data = to_frame(aggs)
    return (
        alt.Chart(data)
        .mark_bar()
        .encode(
            x=alt.X("value:Q", title=value_title),
            y=alt.Y("label:N", sort=list(data["label"]), title=None),
            tooltip=["label", "value", "records"],
        )
    )

def count_vs_unique_chart(aggs: List[Aggregate]) -> alt.Chart:
    """Unique DI next to raw record count per label."""
    data = to_frame(aggs).rename(columns={"value": "Unique DI", "secondary_value": "Records"})
    long = data.melt(id_vars=["label"], value_vars=["Unique DI", "Records"], var_name="measure", value_name="n")
    return (
        alt.Chart(long)
        .mark_bar()
        .encode(
            x=alt.X("n:Q", title="Count"),
            y=alt.Y("label:N", sort=list(data["label"]), title=None),
            yOffset="measure:N",
            color=alt.Color("measure:N", legend=alt.Legend(title=None)),
            tooltip=["label", "measure", "n"],
        )
    )

def monthly_chart(aggs: List[Aggregate], value_title: str, empty_as_missing: bool = False) -> alt.Chart:
    data = to_frame(aggs)
    if empty_as_missing:
        # duration buckets without any measured record report 0; show them as gaps
        data.loc[data["secondary_value"].fillna(0) == 0, "value"] = None
    months = list(data["label"])
    return (
        alt.Chart(data)
        .mark_line(point=True)
        .encode(
            x=alt.X("label:N", sort=months, title=None),
            y=alt.Y("value:Q", title=value_title),
            tooltip=["label", "value", "records"],
        )
    )

def stacked_volume_chart(stacked: Dict[str, List[Aggregate]]) -> alt.Chart:
    data = stacked_to_frame(stacked)
    months = list(dict.fromkeys(data["month"]))
    domain = sorted(data["series"].unique())
    return (
        alt.Chart(data)
        .mark_bar()
        .encode(
            x=alt.X("month:N", sort=months, title=None),
            y=alt.Y("value:Q", title="Containers"),
            color=alt.Color("series:N", title="Terminal",
                            scale=alt.Scale(domain=domain, range=[terminal_color(s) for s in domain])),
            tooltip=["month", "series", "value"],
        )
    )
