# run_scraper.py
import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml

# Import RichHandler here for centralized logging
from rich.logging import RichHandler
from rich.console import Console
from rich.markup import escape
from rich.pretty import pprint

from catalog_pipeline import config
from catalog_pipeline.config import FeatureToggles
from catalog_pipeline.main import PipelineState, main as run_pipeline


def configure_logging(config_data: dict) -> logging.Logger:
    """Root logger with an application log, an error-only log and a rich console handler."""
    settings = config.logging_settings(config_data)
    log_dir = Path(settings["directory"])
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings["level"], logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)-8s - %(name)-25s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(log_dir / settings["application_log"], encoding="utf-8")
    file_handler.setLevel(logging.DEBUG) # Log everything that passes the root level to file
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    error_handler = logging.FileHandler(log_dir / settings["error_log"], encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    root_logger.addHandler(error_handler)

    rich_handler = RichHandler(
        level=logging.DEBUG,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    root_logger.addHandler(rich_handler)

    return logging.getLogger("catalog_pipeline")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape a product catalog page and export it to CSV, JSON, YAML and text.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=config.DEFAULT_CONFIG_PATH,
        help="Main YAML configuration file."
    )
    parser.add_argument(
        '--config-dir',
        type=Path,
        default=config.DEFAULT_CONFIG_DIR,
        help="Directory of extra YAML files merged on top of the main configuration."
    )
    parser.add_argument(
        '--enable',
        nargs='+',
        default=[],
        metavar='TOGGLE',
        help="Feature toggles to switch on, e.g. --enable run_save_to_sqlite\nAvailable: " + ", ".join(FeatureToggles.available_toggles())
    )
    parser.add_argument(
        '--disable',
        nargs='+',
        default=[],
        metavar='TOGGLE',
        help="Feature toggles to switch off, e.g. --disable run_save_to_text"
    )
    parser.add_argument(
        '--show-items',
        action='store_true',
        help="Print every extracted record after the run."
    )
    parser.add_argument(
        '--print-config',
        action='store_true',
        help="Print the merged configuration before running."
    )
    return parser


def cli(argv=None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()

    try:
        config_data = config.load_config(args.config, args.config_dir)
        if args.print_config:
            console.rule("Loaded configuration")
            pprint(config_data, expand_all=True)
        logger = configure_logging(config_data)
        toggles = FeatureToggles(config_data.get("toggles") or {}, logger=logger)
    except (yaml.YAMLError, ValueError, OSError) as e:
        # Logging may not be set up yet, so report straight to the console.
        console.print(f"[bold red]FAILED[/bold red]: could not load configuration: {escape(str(e))}", highlight=False)
        return 1

    toggles.configure({name: 1 for name in args.enable})
    toggles.configure({name: 0 for name in args.disable})

    logger.info("=" * 60)
    logger.info("Catalog Pipeline Starting...")
    logger.info("Toggles: %s", toggles.as_dict())
    logger.info("=" * 60)

    try:
        report = asyncio.run(run_pipeline(config_data, toggles, logger=logger))
    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user.")
        return 130
    finally:
        logger.info("=" * 60)
        logger.info("Pipeline execution finished.")

    if report.state is PipelineState.FAILED:
        console.print(f"[bold red]FAILED[/bold red]: {escape(str(report.error))}", highlight=False)
        return 1

    if args.show_items:
        for line in report.catalog.show_all_items():
            console.print(line, markup=False)

    console.print(f"[bold green]DONE[/bold green]: {len(report.catalog)} products, total price {report.catalog.total_price():.2f}")
    for sink in report.sinks:
        if sink.error is not None:
            console.print(f"  [red]{sink.name}[/red] failed: {escape(str(sink.error))}")
        else:
            console.print(f"  {sink.name}: {sink.status} ({sink.target})")
    return 0


if __name__ == "__main__":
    sys.exit(cli())
