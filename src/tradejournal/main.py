"""Command line entry point for trade journal analytics."""
import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from tradejournal.analytics import AnalyticsManager, AnalyticsReport
from tradejournal.config.settings import RuntimeConfig, Settings
from tradejournal.export import ReportExporter
from tradejournal.ingest import TradeFileReader

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging in the application format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradejournal",
        description="Compute performance analytics for closed trades.",
    )
    parser.add_argument("trades_file", type=Path, help="JSON or CSV file of closed trades")
    parser.add_argument("--config", type=Path, default=None, help="Path to settings YAML")
    parser.add_argument("--initial-capital", type=float, default=None)
    parser.add_argument("--buckets", type=int, default=None, help="P&L distribution buckets")
    parser.add_argument("--export", action="store_true", help="Write CSV/JSON report files")
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--prefix", default="report", help="Export file name prefix")
    return parser


def load_and_validate_config(config_path: Path | None = None) -> Settings:
    """Load and validate configuration.

    An explicitly requested config file must exist; the default path is
    optional and falls back to built-in defaults.

    Returns:
        Settings object.

    Raises:
        SystemExit: If the config file is missing or invalid.
    """
    load_dotenv()

    explicit = config_path is not None
    path = config_path or Path(RuntimeConfig().config_path)

    if not path.exists():
        if explicit:
            logger.error(f"{path} not found")
            sys.exit(1)
        logger.warning(f"{path} not found, using default settings")
        return Settings()

    try:
        settings = Settings.from_yaml(path)
    except (ValidationError, ValueError, OSError) as e:
        logger.error(f"Failed to parse {path}: {e}")
        sys.exit(1)

    logger.info(f"✓ Settings loaded from {path}")
    return settings


def log_summary(report: AnalyticsReport) -> None:
    """Log the headline metrics of a report."""
    metrics = report.metrics
    logger.info("=" * 60)
    logger.info(f"Trades: {metrics.total_trades} (skipped {report.skipped_trades})")
    logger.info(
        f"Win rate: {metrics.win_rate:.1f}% "
        f"({metrics.winning_trades}W / {metrics.losing_trades}L / {metrics.breakeven_trades}BE)"
    )
    logger.info(f"Total P&L: {metrics.total_pnl:.2f}")
    logger.info(f"Profit factor: {metrics.profit_factor:.2f}")
    logger.info(
        f"Max drawdown: {metrics.max_drawdown:.2f} ({metrics.max_drawdown_percent:.2f}%)"
    )
    logger.info("=" * 60)


def run(args: argparse.Namespace) -> AnalyticsReport:
    """Load settings and trades, build the report and optionally export it."""
    settings = load_and_validate_config(args.config)
    logger.info(f"{settings.system.name}: analyzing {args.trades_file}")

    reader = TradeFileReader()
    try:
        records = reader.read(args.trades_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to read trades: {e}")
        sys.exit(1)

    manager = AnalyticsManager(settings.analytics)
    report = manager.build_report(
        records,
        initial_capital=args.initial_capital,
        bucket_count=args.buckets,
    )
    log_summary(report)

    if args.export:
        export_settings = settings.export
        if args.output_dir is not None:
            export_settings = export_settings.model_copy(
                update={"output_dir": str(args.output_dir)}
            )
        ReportExporter(export_settings).write(report, prefix=args.prefix)

    return report


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.buckets is not None and args.buckets < 1:
        parser.error("--buckets must be at least 1")

    load_dotenv()
    configure_logging(RuntimeConfig().log_level)
    run(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
