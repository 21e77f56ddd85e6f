from __future__ import annotations

import tempfile
from typing import Any

import plotly.graph_objects as go
import plotly.io as pio

from budgie.currency import currency_symbol
from budgie.db.models import AggregateResult, Summary

THEME: dict[str, Any] = {
    "colors": {
        "palette": [
            "#4C72B0",
            "#55A868",
            "#C44E52",
            "#8172B3",
            "#CCB974",
            "#64B5CD",
            "#E5AE38",
            "#6D904F",
            "#8B8B8B",
            "#D65F5F",
            "#B47CC7",
            "#C4AD66",
            "#77BEDB",
            "#92C6FF",
        ],
        "categories": {
            "Housing": "#FF6B6B",
            "Insurance": "#4ECDC4",
            "Financial": "#45B7D1",
            "Food & Groceries": "#96CEB4",
            "Personal & Medical": "#FFEEAD",
            "Entertainment": "#D4A5A5",
            "Transport": "#FFB6C1",
            "Children": "#9FE2BF",
        },
        "savings": "#2196F3",
        "surplus": "#4CAF50",
        "deficit": "#F44336",
        "grid": "#E5E5E5",
        "background": "#FAFAFA",
        "text": "#2D3436",
        "muted": "#636E72",
    },
    "font": {
        "family": "Inter, sans-serif",
        "size": 13,
        "title_size": 16,
    },
    "size": {
        "width": 800,
        "height": 500,
        "scale": 2,
    },
    "margin": {"l": 60, "r": 30, "t": 60, "b": 50},
}

PIE_CATEGORY_THRESHOLD = 6

_custom_template = pio.templates["plotly_white"]
_custom_template.layout.font = dict(
    family=THEME["font"]["family"],
    size=THEME["font"]["size"],
    color=THEME["colors"]["text"],
)
_custom_template.layout.title = dict(
    font=dict(size=THEME["font"]["title_size"], color=THEME["colors"]["text"]),
    x=0.5,
    xanchor="center",
)
_custom_template.layout.plot_bgcolor = THEME["colors"]["background"]
_custom_template.layout.xaxis = dict(gridcolor=THEME["colors"]["grid"])
_custom_template.layout.yaxis = dict(gridcolor=THEME["colors"]["grid"])
pio.templates["budgie"] = _custom_template
pio.templates.default = "budgie"


def _fmt_amount(value: float, cur: str) -> str:
    sym = currency_symbol(cur)
    sign = "-" if value < 0 else ""
    value = abs(value)
    body = f"{value:,.0f}" if value >= 1000 else f"{value:.2f}"
    if len(sym) <= 3 and not sym.isalpha():
        return f"{sign}{sym}{body}"
    return f"{sign}{body} {sym}"


def _category_colors(categories: list[str]) -> list[str]:
    palette = THEME["colors"]["palette"]
    known = THEME["colors"]["categories"]
    return [known.get(name, palette[i % len(palette)]) for i, name in enumerate(categories)]


def _base_layout() -> dict[str, Any]:
    return {
        "margin": THEME["margin"],
        "width": THEME["size"]["width"],
        "height": THEME["size"]["height"],
    }


def _save(fig: go.Figure) -> str:
    tmp = tempfile.NamedTemporaryFile(suffix=".png", delete=False)  # noqa: SIM115
    tmp.close()
    fig.write_image(tmp.name, scale=THEME["size"]["scale"])
    return tmp.name


def ring_segments(summary: Summary) -> list[tuple[str, float, str]]:
    """Slices of the summary ring: non-zero expense categories, then savings."""
    expenses = [(name, total) for name, total in summary.expenses.totals.items() if total > 0]
    colors = _category_colors([name for name, _ in expenses])
    segments = [(name, total, color) for (name, total), color in zip(expenses, colors, strict=True)]
    if summary.savings.total > 0:
        segments.append(("Savings", summary.savings.total, THEME["colors"]["savings"]))
    return segments


async def summary_ring_chart(summary: Summary, cur: str = "AUD") -> str | None:
    segments = ring_segments(summary)
    if not segments:
        return None

    balance_color = THEME["colors"]["surplus"] if summary.is_surplus else THEME["colors"]["deficit"]
    fig = go.Figure(
        go.Pie(
            labels=[name for name, _, _ in segments],
            values=[total for _, total, _ in segments],
            marker=dict(colors=[color for _, _, color in segments]),
            textinfo="label+percent",
            texttemplate="%{label}<br>%{percent:.0%}",
            hovertemplate="%{label}: %{value:,.2f} " + cur + "<extra></extra>",
            hole=0.55,
            sort=False,
        )
    )
    fig.update_layout(
        **_base_layout(),
        title=f"Budget ({summary.period})",
        showlegend=False,
    )
    fig.add_annotation(
        text=f"{'Surplus' if summary.is_surplus else 'Deficit'}<br>{_fmt_amount(summary.balance, cur)}",
        x=0.5,
        y=0.5,
        showarrow=False,
        font=dict(size=18, color=balance_color),
    )
    return _save(fig)


async def category_breakdown_chart(result: AggregateResult, title: str, cur: str = "AUD") -> str | None:
    rows = [(name, total) for name, total in result.totals.items() if total > 0]
    if not rows:
        return None

    categories = [name for name, _ in rows]
    totals: list[float] = [total for _, total in rows]
    colors = _category_colors(categories)

    if len(categories) <= PIE_CATEGORY_THRESHOLD:
        fig = go.Figure(
            go.Pie(
                labels=categories,
                values=totals,
                marker=dict(colors=colors),
                textinfo="label+percent",
                texttemplate="%{label}<br>%{percent:.0%}",
                hovertemplate="%{label}: %{value:,.2f} " + cur + "<extra></extra>",
                hole=0.35,
                sort=False,
            )
        )
        fig.update_layout(**_base_layout(), title=title, showlegend=False)
        fig.add_annotation(
            text=_fmt_amount(sum(totals), cur),
            x=0.5,
            y=0.5,
            showarrow=False,
            font=dict(size=18, color=THEME["colors"]["text"]),
        )
    else:
        fig = go.Figure(
            go.Bar(
                x=totals,
                y=categories,
                orientation="h",
                marker_color=colors,
                text=[_fmt_amount(v, cur) for v in totals],
                textposition="outside",
                hovertemplate="%{y}: %{x:,.2f} " + cur + "<extra></extra>",
            )
        )
        fig.update_layout(**_base_layout(), title=title, xaxis_title=cur)
        fig.update_yaxes(autorange="reversed")

    return _save(fig)
