import click
from pathlib import Path

from cli_options import common_output_options, setup_logging
from config.extractor_config import ExtractorConfig
from config.server_config import ServerConfig
from controllers.extract_controller import ExtractController
from controllers.get_controller import GetController
from services.json_dicom_converter import JsonDicomConverter
from services.metadata_extractor import DicomMetadataExtractorToJson
from services.search_criteria import SearchCriteria

VERSION = '1.0.0'


@click.group()
@click.version_option(version=VERSION, prog_name='DICOM Metadata Extractor')
def cli():
    """DICOM Metadata Extractor - Write the metadata of DICOM files as JSON."""
    pass


@cli.command()
@click.argument('source', type=click.Path(exists=True, file_okay=False))
@common_output_options
@click.option('--workers', '-w', type=click.IntRange(min=1), default=None, help='Number of files converted in parallel.')
def extract(source, output, indent, hex_keys, verbose, workers):
    """Extract the metadata of every .dcm file in SOURCE to JSON files."""
    setup_logging(verbose)
    click.echo(click.style(f"Extracting metadata from {source}...", fg='cyan', bold=True))

    controller = ExtractController(
        ExtractorConfig,
        max_workers=workers,
        indent=indent,
        write_tags_as_keywords=not hex_keys,
    )
    destination = Path(output) if output else Path(source) / ExtractorConfig.DESTINATION_FOLDER
    stats = controller.extract_folder(source, destination)

    if stats.total == 0:
        click.echo(click.style("No DICOM files found.", fg='red', bold=True))
        return

    click.echo(click.style(f"{stats.converted} file(s) converted to {destination}", fg='green', bold=True))
    if stats.skipped:
        click.echo(click.style(f"{stats.skipped} invalid DICOM file(s) skipped.", fg='yellow'))
    if stats.errors:
        click.echo(click.style(f"{stats.errors} file(s) failed.", fg='red', bold=True))
        raise SystemExit(1)


@cli.command()
@click.option('--study-instance-uid', '-stui', required=True, help='Study Instance UID to retrieve.')
@click.option('--series-instance-uid', '-seui', help='Series Instance UID to retrieve (SERIES level).')
@common_output_options
def get(study_instance_uid, series_instance_uid, output, indent, hex_keys, verbose):
    """Retrieve a study or series by C-GET and write the metadata of each instance."""
    setup_logging(verbose, network=True)
    level = 'SERIES' if series_instance_uid else 'STUDY'
    criteria = SearchCriteria(
        level=level,
        study_instance_uid=study_instance_uid,
        series_instance_uid=series_instance_uid,
    )
    extractor = DicomMetadataExtractorToJson(
        JsonDicomConverter(write_tags_as_keywords=not hex_keys), indent=indent
    )
    controller = GetController(ServerConfig, output_dir=output or "output_dir", extractor=extractor)

    click.echo(click.style(f"Retrieving {level.lower()} {series_instance_uid or study_instance_uid}...", fg='cyan', bold=True))
    received = controller.get(criteria)
    if received is False:
        click.echo(click.style("Association with the DICOM server failed.", fg='red', bold=True))
        raise SystemExit(1)

    click.echo(click.style(f"Metadata written for {received} instance(s).", fg='yellow', bold=True))


if __name__ == '__main__':
    cli()
