import logging
import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

import click
from behave.__main__ import main as behave_main

from .core.config_loader import ConfigLoader, DEFAULT_CONFIG_FILE
from .data_models import DEFAULT_BROWSER
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)

# Relative to the working directory, as behave resolves them
DEFAULT_FEATURES_DIR = Path('features')
DEFAULT_REPORTS_DIR = Path('reports')
DEFAULT_REPORT_NAME = 'behave'
HTML_FORMATTER = 'behave_html_formatter:HTMLFormatter'


def build_behave_args(
    features: Sequence[str],
    *,
    browser: str,
    headless: bool,
    config_path: Optional[str],
    tags: Sequence[str],
    reports_dir: Path,
    report_name: str = DEFAULT_REPORT_NAME,
) -> List[str]:
    """
    Translates harness options into a behave command line.

    Reports: JSON to <reports_dir>/<report_name>.json, HTML to
    <reports_dir>/<report_name>.html, JUnit XML under <reports_dir>/junit,
    pretty output on the console.
    """
    args: List[str] = list(features) if features else [str(DEFAULT_FEATURES_DIR)]
    # Outfiles pair with formatters in order; pretty comes last so it keeps stdout
    args += ['--format', 'json.pretty', '--outfile', str(reports_dir / f'{report_name}.json')]
    args += ['--format', HTML_FORMATTER, '--outfile', str(reports_dir / f'{report_name}.html')]
    args += ['--format', 'pretty']
    args += ['--junit', '--junit-directory', str(reports_dir / 'junit')]
    args += ['-D', f'browser={browser}', '-D', f'headless={str(headless).lower()}']
    if config_path:
        args += ['-D', f'config={config_path}']
    for tag_expression in tags:
        args += ['--tags', tag_expression]
    return args


def discover_feature_files(features: Sequence[str]) -> List[Path]:
    """Expands feature directories into their .feature files; explicit files are kept as given."""
    feature_files: List[Path] = []
    for entry in (features or [str(DEFAULT_FEATURES_DIR)]):
        path = Path(entry)
        if path.is_dir():
            feature_files.extend(sorted(path.rglob('*.feature')))
        else:
            feature_files.append(path)
    return feature_files


def _worst_exit_code(exit_codes: Sequence[int]) -> int:
    # A negative return code means the behave process was killed by a signal
    return max((code if code >= 0 else 1) for code in exit_codes)


def run_features_in_parallel(feature_files: Sequence[Path], workers: int, **behave_options) -> int:
    """
    Runs one behave process per feature file, at most `workers` at a time.

    behave keeps global state per run, so each feature gets its own interpreter
    and its own JSON/HTML report. Returns the worst exit code of all runs.
    """
    reports_dir: Path = behave_options['reports_dir']

    def run_one(index: int, feature_file: Path) -> int:
        report_name = f'{DEFAULT_REPORT_NAME}-{index:02d}-{feature_file.stem}'
        args = build_behave_args([str(feature_file)], report_name=report_name, **behave_options)
        logger.info(f"Starting behave for {feature_file} (report: {reports_dir / report_name}.json)")
        completed = subprocess.run([sys.executable, '-m', 'behave', *args], check=False)
        if completed.returncode != 0:
            logger.warning(f"behave exited with {completed.returncode} for {feature_file}")
        return completed.returncode

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='behave') as executor:
        futures = [executor.submit(run_one, index, path) for index, path in enumerate(feature_files, start=1)]
        exit_codes = [future.result() for future in futures]

    logger.info(f"Parallel run finished: {len(exit_codes)} feature file(s), exit codes {exit_codes}")
    return _worst_exit_code(exit_codes)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('features', nargs=-1, type=click.Path())
@click.option('--browser', '-b', default=DEFAULT_BROWSER, show_default=True, help='Browser to run scenarios in (chrome, firefox, edge)')
@click.option('--headless/--no-headless', default=False, show_default=True, help='Run browsers without a visible window')
@click.option('--config', '-c', 'config_path', type=click.Path(dir_okay=False), default=None, help='Browser configuration JSON file')
@click.option('--tags', '-t', multiple=True, help='behave tag expression; may be repeated')
@click.option('--reports-dir', type=click.Path(file_okay=False), default=str(DEFAULT_REPORTS_DIR), show_default=True, help='Directory for JSON, HTML and JUnit reports')
@click.option('--parallel', '-j', type=click.IntRange(min=1), default=1, show_default=True, help='Feature files to run concurrently, one behave process each')
@click.pass_context
def cli(ctx, features, browser, headless, config_path, tags, reports_dir, parallel):
    """Run the Gherkin features under behave against a real browser."""
    config = ConfigLoader(config_path or DEFAULT_CONFIG_FILE).load()
    setup_logger(config)
    if config.is_empty():
        logger.warning("No browser configuration loaded; every browser runs with built-in defaults.")

    reports_path = Path(reports_dir)
    (reports_path / 'junit').mkdir(parents=True, exist_ok=True)
    behave_options = dict(
        browser=browser,
        headless=headless,
        config_path=config_path,
        tags=tags,
        reports_dir=reports_path,
    )
    logger.info(f"Browser set to: {browser} (headless={headless})")

    if parallel > 1:
        feature_files = discover_feature_files(features)
        if len(feature_files) > 1:
            ctx.exit(run_features_in_parallel(feature_files, parallel, **behave_options))
        logger.info("Only one feature file found; running behave in-process")

    args = build_behave_args(features, **behave_options)
    logger.debug(f"behave arguments: {args}")
    exit_code = behave_main(args)
    ctx.exit(exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
