"""
Project Payload Script.
Loads a raw analytics payload file and prints the per-metric views the charts would draw.
"""
import argparse
import asyncio
import logging

from unifiedanalytics.adapters.config.settings_loader import load_settings
from unifiedanalytics.adapters.source.file_source import FilePayloadSource
from unifiedanalytics.core.services.analytics_pipeline import UnifiedAnalyticsPipeline
from unifiedanalytics.core.services.projector import to_frame

logger = logging.getLogger(__name__)


async def main(path: str, config: str | None, show_rows: int):
    settings = load_settings(config)
    logging.basicConfig(level=settings.log_level)

    payload = await FilePayloadSource(path).load()
    pipeline = UnifiedAnalyticsPipeline(settings=settings)
    views = pipeline.run_all(payload)

    for metric, view in views.items():
        stats = view.stats
        print(f"\n=== {metric.value} ===")
        print(f"points: {len(view.projection)}")
        print(f"current: total={stats.current_total} avg={stats.current_average} "
              f"({stats.current_period_point_count} pts)")
        print(f"forecast: total={stats.forecast_total} avg={stats.forecast_average} "
              f"({stats.forecast_period_point_count} pts)")
        print(f"growth: {stats.growth_rate_percent}%  vs previous period: {stats.period_change_percent}%")
        if show_rows:
            print(to_frame(view.projection).tail(show_rows).to_string(index=False))

    first = next(iter(views.values()))
    print(f"\ntotals ({first.totals.source}): revenue={first.totals.total_revenue} "
          f"orders={first.totals.total_orders} over {first.totals.period_days} days")
    if not first.diagnostics.clean:
        print(f"diagnostics: {first.diagnostics.defaulted_fields} fields defaulted, "
              f"{first.diagnostics.clamped_fields} clamped, "
              f"{first.diagnostics.dropped_records} records dropped")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Project a raw analytics payload into chart views")
    parser.add_argument("payload", help="Path to a JSON or YAML payload file")
    parser.add_argument("--config", default=None, help="Path to analytics settings YAML")
    parser.add_argument("--rows", type=int, default=5, help="Trailing rows to print per metric")
    args = parser.parse_args()
    asyncio.run(main(args.payload, args.config, args.rows))
