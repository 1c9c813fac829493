import io

import matplotlib
matplotlib.use('Agg')  # Use non-GUI backend
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
import matplotlib.patches as mpatches

from .models import DEFAULT_STYLES


def display_rows(tasks):
    """Flatten view models into the plain rows a chart widget consumes."""
    rows = []
    for t in tasks:
        styles = dict(DEFAULT_STYLES)
        styles.update(t.styles or {})
        rows.append({
            'id': t.key,
            'name': t.name,
            'start': t.start,
            'end': t.end,
            'progress': t.progress,
            'type': t.type,
            'isDisabled': t.is_disabled,
            'styles': styles,
        })
    return rows


class MatplotlibGanttRenderer:
    """Render display rows as a PNG Gantt chart, one bar per task."""

    def __init__(self, figsize=(12, 6), font_size=10):
        self.figsize = figsize
        self.font_size = font_size

    def render(self, rows):
        fig, ax = plt.subplots(figsize=self.figsize)
        try:
            if not rows:
                ax.text(0.5, 0.5, 'No tasks to display', ha='center', va='center', fontsize=16, color='gray', transform=ax.transAxes)
                ax.set_xlabel('Date')
            else:
                self._draw(ax, rows)
                fig.autofmt_xdate()
            fig.tight_layout()
            buf = io.BytesIO()
            fig.savefig(buf, format='png')
            return buf.getvalue()
        finally:
            plt.close(fig)

    def _draw(self, ax, rows):
        for i, row in enumerate(rows):
            start = mdates.date2num(row['start'])
            # End date is inclusive
            dur = max(mdates.date2num(row['end']) - start + 1, 1)
            percent = max(0, min(row['progress'] or 0, 100))
            done_dur = dur * percent / 100.0
            styles = row['styles']
            alpha = 0.4 if row['isDisabled'] else 1.0
            # Draw completed part
            if done_dur > 0:
                ax.barh(i, done_dur, left=start, height=0.4, align='center', color=styles['progressColor'], edgecolor='black', alpha=alpha)
            # Draw remaining part
            if done_dur < dur:
                ax.barh(i, dur - done_dur, left=start + done_dur, height=0.4, align='center', color=styles['backgroundColor'], edgecolor='black', alpha=alpha)
        ax.set_yticks(list(range(len(rows))))
        ax.set_yticklabels([r['name'] for r in rows], fontsize=self.font_size)
        ax.set_xlabel('Date')
        ax.xaxis.set_major_locator(mdates.AutoDateLocator())
        ax.xaxis.set_major_formatter(mdates.DateFormatter('%Y-%m-%d'))
        ax.invert_yaxis()
        legend_items = [
            mpatches.Patch(color=DEFAULT_STYLES['progressColor'], label='Completed Portion'),
            mpatches.Patch(color=DEFAULT_STYLES['backgroundColor'], label='Remaining Portion'),
        ]
        ax.legend(handles=legend_items, loc='upper left', bbox_to_anchor=(1.01, 1), frameon=True)
