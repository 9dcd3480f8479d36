"""Chart images embedded in the PDF report."""
from __future__ import annotations

import io
import logging
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from survey_analytics.reporting import config  # noqa: E402
from survey_analytics.reporting.context import TallySlice  # noqa: E402

logger = logging.getLogger(__name__)

# Very Satisfied → Very Dissatisfied
SLICE_COLOURS = ["#4bc0c0", "#36a2eb", "#ffce56", "#ff9f40", "#ff6384"]


def satisfaction_pie_png(slices: list[TallySlice]) -> Optional[bytes]:
    """Return a PNG pie chart of *slices*, or ``None`` when all counts are 0.

    Each wedge is labelled with its raw count and share of the total.
    """

    if not any(s.count for s in slices):
        return None

    fig, ax = plt.subplots(figsize=(config.CHART_WIDTH_IN, config.CHART_HEIGHT_IN))
    try:
        wedges, _ = ax.pie(
            [s.count for s in slices],
            colors=SLICE_COLOURS[: len(slices)],
            startangle=90,
            counterclock=False,
            wedgeprops={"edgecolor": "white", "linewidth": 1},
        )
        ax.legend(
            wedges,
            [s.caption for s in slices],
            loc="center left",
            bbox_to_anchor=(1.0, 0.5),
            frameon=False,
            fontsize=9,
        )
        ax.set_title("Overall Satisfaction Distribution")
        ax.axis("equal")

        buf = io.BytesIO()
        fig.savefig(
            buf,
            format="png",
            dpi=config.CHART_DPI,
            bbox_inches="tight",
            facecolor="white",
            metadata={"Software": None},
        )
    finally:
        plt.close(fig)

    logger.debug("Rendered satisfaction pie chart (%d bytes)", buf.tell())
    return buf.getvalue()
