import os
import click
import logging
import pandas as pd
from config.extractor_config import ExtractorConfig
from controllers.extract_controller import ExtractController
from cli_options import setup_logging

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def load_file_list(file_path):
    """
    Loads DICOM file paths from a CSV or Excel file.

    Args:
        file_path: Path to the file (.csv or .xlsx), paths in the first column

    Returns:
        List of cleaned paths (str, no surrounding spaces, non-empty)
    """
    file_ext = os.path.splitext(file_path)[1].lower()

    if file_ext == '.xlsx':
        df = pd.read_excel(file_path, header=0)
        logger.info(f"Excel file loaded: {file_path}")
    elif file_ext == '.csv':
        df = pd.read_csv(file_path, header=0, skip_blank_lines=True)
        logger.info(f"CSV file loaded: {file_path}")
    else:
        raise ValueError(f"Unsupported file format: {file_ext}. Use .csv or .xlsx")

    if df.empty:
        logger.warning(f"File is empty: {file_path}")
        return []

    paths = (
        df.iloc[:, 0]
        .dropna()
        .astype(str)
        .str.strip()
        .tolist()
    )
    paths = [p for p in paths if p]

    logger.info(f"Extracted {len(paths)} DICOM file path(s)")
    return paths


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('--file', '-f', required=True, type=click.Path(exists=True, dir_okay=False), help='CSV or XL Path (first column: DICOM file path)')
@click.option('--output', '-o', required=True, type=click.Path(file_okay=False), help='Folder receiving the JSON files')
@click.option('--max-workers', '-w', default=ExtractorConfig.MAX_WORKERS, help='Number of parallel conversions')
@click.option('--indent', '-i', type=int, default=None, help='Indent the JSON output by this many spaces')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(file, output, max_workers, indent, verbose):
    """Extract the metadata of the DICOM files listed in a CSV or Excel file."""
    setup_logging(verbose)
    paths = load_file_list(file)
    if not paths:
        click.echo(click.style("No DICOM files listed.", fg='red'))
        return

    controller = ExtractController(ExtractorConfig, max_workers=max_workers, indent=indent)
    stats = controller.extract_files(paths, output)

    logger.info("=" * 60)
    logger.info("EXTRACTION COMPLETED")
    logger.info(f"Files: {len(paths)}, Converted: {stats.converted}, Skipped: {stats.skipped}, Errors: {stats.errors}")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
