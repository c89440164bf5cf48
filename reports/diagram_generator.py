"""
Diagram generator for sunlight timelines.
"""

from typing import Optional
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
from matplotlib.figure import Figure

from models.calculation_result import ShadowMethod, SunlightTimeline


class DiagramGenerator:
    """Generates diagrams and visualizations for sunlight calculations."""

    def __init__(self, dpi: int = 150):
        """
        Initialize diagram generator.

        Args:
            dpi: Resolution for diagrams
        """
        self.dpi = dpi

    def generate_timeline_diagram(
        self,
        timeline: SunlightTimeline,
        title: Optional[str] = None,
        output_path: Optional[str] = None,
        close: bool = False
    ) -> Figure:
        """
        Plot solar altitude over the day with sunlit periods highlighted.

        Args:
            timeline: Sunlight timeline
            title: Optional diagram title
            output_path: Optional path to save diagram
            close: Release the figure from pyplot once drawn (and saved)

        Returns:
            Matplotlib figure
        """
        if not timeline.samples:
            raise ValueError("Timeline has no samples")

        fig, ax = plt.subplots(figsize=(10, 5))

        times = [sample_time for sample_time, _ in timeline.samples]
        altitudes = [
            result.solar_position.altitude_degrees if result.solar_position else float('nan')
            for _, result in timeline.samples
        ]
        ax.plot(times, altitudes, color='orange', linewidth=2, label='Sun altitude')
        ax.axhline(0, color='gray', linewidth=1)

        for index, (period_start, period_end) in enumerate(timeline.periods):
            ax.axvspan(
                period_start, period_end, color='#FFDD00', alpha=0.3,
                label='Direct sunlight' if index == 0 else None
            )

        fallback_times = [
            sample_time for sample_time, result in timeline.samples
            if result.method == ShadowMethod.FALLBACK
        ]
        if fallback_times:
            ax.scatter(
                fallback_times, [0] * len(fallback_times), marker='x', color='red',
                label='Ray tracing failed'
            )

        for key, style in (('sunrise', '--'), ('sunset', ':')):
            event = timeline.details.get(key)
            if event is not None:
                ax.axvline(event, color='#3F51B5', linestyle=style, label=key.capitalize())

        ax.xaxis.set_major_formatter(mdates.DateFormatter('%H:%M', tz=timeline.start.tzinfo))
        ax.set_xlabel('Time')
        ax.set_ylabel('Altitude (deg)')
        ax.set_title(title or f'Sunlight on {timeline.calculation_date} ({timeline.duration_formatted})')
        ax.grid(alpha=0.3)
        ax.legend(loc='upper right')

        plt.tight_layout()

        if output_path:
            fig.savefig(output_path, dpi=self.dpi, bbox_inches='tight')

        if close:
            plt.close(fig)

        return fig
