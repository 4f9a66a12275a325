"""Stacked bar chart of object types per year with a linked legend."""
from stackbar import ChartConfig, ChartLogger, StackedBarChart, get_chart_callbacks

raw = [
    ("2020", "Öffentliche Einrichtungen", 10),
    ("2020", "Öffentliche Beleuchtung", 20),
    ("2020", "Kein Objekttyp", 30),
    ("2021", "Öffentliche Einrichtungen", 20),
    ("2021", "Öffentliche Beleuchtung", 30),
    ("2021", "Kein Objekttyp", 10),
    ("2022", "Öffentliche Einrichtungen", 20),
    ("2022", "Öffentliche Beleuchtung", 55),
    ("2022", "Kein Objekttyp", 35),
    ("2023", "Öffentliche Einrichtungen", 23),
    ("2023", "Öffentliche Beleuchtung", 65),
    ("2023", "Kein Objekttyp", 45),
    ("2024", "Öffentliche Einrichtungen", 3),
    ("2024", "Öffentliche Beleuchtung", 15),
    ("2024", "Kein Objekttyp", 83),
]
records = [{"category": c, "subcategory": s, "value": v} for c, s, v in raw]
years = ["2020", "2021", "2022", "2023", "2024"]

logger = ChartLogger(verbose=2)
chart = StackedBarChart(
    records,
    categories=years,
    config=ChartConfig.from_style({"theme": "minimal"}),
    callbacks=get_chart_callbacks(logger),
)

fig = chart.to_figure(style={"title": "Objekttypen pro Jahr"})

# Replay pointer events the way a FigureWidget or Dash callback would
mount = chart.mount
point = {"curveNumber": 1, "pointNumber": 3, "customdata": ["Öffentliche Beleuchtung", "2023", 65]}
mount.handle_event("hover", {"points": [point]})
mount.handle_event("click", {"points": [point]})
fig.show()
mount.handle_event("unhover")

print(logger.get_summary_df())
