"""Render the three charts for a CSV into a standalone HTML file (no server).

    python examples/export_charts.py [path/to/socialMedia.csv] [out.html]
"""
import sys
from pathlib import Path

import plotly.graph_objects as go

from socialcharts.charts.layout import RENDER_TARGETS
from socialcharts.data.loader import default_source
from socialcharts.pipeline import build_figures, load_records
from socialcharts.utils.logging import configure_logging

configure_logging(level="INFO")

src = sys.argv[1] if len(sys.argv) > 1 else default_source()
out = Path(sys.argv[2] if len(sys.argv) > 2 else "social_charts.html")

figures = build_figures(load_records(src))

parts = []
for i, target in enumerate(RENDER_TARGETS):
    html = go.Figure(figures[target]).to_html(full_html=False, include_plotlyjs="cdn" if i == 0 else False)
    parts.append(f'<div id="{target}">{html}</div>')

out.write_text("<html><body>\n" + "\n".join(parts) + "\n</body></html>\n")
print(f"wrote {out}")
