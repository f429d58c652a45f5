"""
services/chart_service.py
--------------------------
Generates chart images for the expense analysis and savings views.
Uses matplotlib to draw bar charts and returns them as BytesIO buffers.
Figures are built directly from matplotlib.figure.Figure, never through
pyplot, so concurrent requests do not share figure state.
"""

import io

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server use
from matplotlib.figure import Figure

from analytics.aggregation import ExpenseAnalysis
from analytics.savings import SavingsOverview
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)

matplotlib.rcParams["font.family"] = "DejaVu Sans"
matplotlib.rcParams["figure.facecolor"] = "#1a1a2e"
matplotlib.rcParams["text.color"] = "#e0e0e0"
matplotlib.rcParams["axes.facecolor"] = "#1a1a2e"

BAR_COLOR = "#6366f1"
HIGHLIGHT_COLOR = "#8b5cf6"
COMPLETE_COLOR = "#10b981"


def _style_axes(ax) -> None:
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["left"].set_color("#444")
    ax.spines["bottom"].set_color("#444")
    ax.tick_params(colors="#e0e0e0")
    ax.set_axisbelow(True)


def _to_png(fig: Figure) -> io.BytesIO:
    fig.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    buf.seek(0)
    return buf


class ChartService:
    """Renders derived dashboard views as PNG images."""

    def expense_bar(self, analysis: ExpenseAnalysis) -> io.BytesIO:
        """
        Draw one bar per bucket, highlighting the highest one.

        An all-zero analysis still renders (empty bars, zero total) so the
        endpoint always returns an image.
        """
        labels = [b.label for b in analysis.buckets]
        amounts = [b.value for b in analysis.buckets]
        highest = analysis.highest

        fig = Figure(figsize=(9, 5))
        ax = fig.subplots()

        bars = ax.bar(
            range(len(labels)), amounts,
            color=[HIGHLIGHT_COLOR if highest > 0 and a == highest else BAR_COLOR for a in amounts],
            edgecolor="#1a1a2e",
            linewidth=1.5,
            width=0.6,
            zorder=3,
        )

        for bar, amount in zip(bars, amounts):
            if amount > 0:
                ax.text(
                    bar.get_x() + bar.get_width() / 2, bar.get_height(),
                    format_currency(amount, decimals=0),
                    ha="center", va="bottom",
                    color="#e0e0e0", fontsize=9, fontweight="bold",
                )

        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels, fontsize=9, color="#e0e0e0")
        ax.set_ylabel("Amount (₹)", fontsize=11, color="#e0e0e0")
        ax.set_title(
            f"Expense Analysis - {analysis.period.title()}\n"
            f"Total: {format_currency(analysis.total)}",
            fontsize=13, fontweight="bold", pad=15,
        )
        _style_axes(ax)
        ax.grid(axis="y", alpha=0.2, color="#888")

        buf = _to_png(fig)
        logger.info(f"Generated {analysis.period} expense chart ({len(labels)} buckets)")
        return buf

    def savings_progress(self, overview: SavingsOverview) -> io.BytesIO | None:
        """
        Draw a horizontal progress bar per savings plan.

        Returns:
            BytesIO buffer with PNG image, or None if there are no plans.
        """
        if not overview.plans:
            return None

        names = [p.plan.name for p in overview.plans]
        widths = [p.bar_width for p in overview.plans]

        fig = Figure(figsize=(9, 1.2 + 0.6 * len(names)))
        ax = fig.subplots()

        ax.barh(range(len(names)), [100] * len(names), color="#2a2a40", height=0.5, zorder=2)
        ax.barh(
            range(len(names)), widths,
            color=[COMPLETE_COLOR if w >= 100 else BAR_COLOR for w in widths],
            height=0.5,
            zorder=3,
        )

        for i, progress in enumerate(overview.plans):
            ax.text(
                101, i,
                f"{format_currency(progress.plan.current_amount, decimals=0)} / "
                f"{format_currency(progress.plan.target_amount, decimals=0)}",
                va="center", color="#e0e0e0", fontsize=9,
            )

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=10, color="#e0e0e0")
        ax.invert_yaxis()
        ax.set_xlim(0, 130)
        ax.set_xticks([0, 25, 50, 75, 100])
        ax.set_title(
            f"Savings Progress - {overview.overall_progress:.0f}% of "
            f"{format_currency(overview.total_target, decimals=0)}",
            fontsize=13, fontweight="bold", pad=15,
        )
        _style_axes(ax)

        buf = _to_png(fig)
        logger.info(f"Generated savings progress chart ({len(names)} plans)")
        return buf
