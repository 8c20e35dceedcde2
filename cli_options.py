import click
import logging

from pynetdicom import debug_logger

LOG_FORMAT = '%(asctime)s - [%(threadName)s] - %(levelname)s - %(message)s'


def common_output_options(f):
    """Decorator to add the JSON output options to CLI commands."""
    options = [
        click.option('--output', '-o', type=click.Path(file_okay=False), help='Folder receiving the JSON files.'),
        click.option('--indent', '-i', type=click.IntRange(min=0), default=None, help='Indent the JSON output by this many spaces.'),
        click.option('--hex-keys', '-x', is_flag=True, help='Write keys as tags (e.g. 00100010) instead of keywords (e.g. PatientName).'),
        click.option('--verbose', '-v', is_flag=True, help='Enable debug logging.'),
    ]

    for option in reversed(options):
        f = option(f)
    return f


def setup_logging(verbose=False, network=False):
    """Configure the root logger, and the pynetdicom logger for network commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT
    )
    if verbose and network:
        debug_logger()
