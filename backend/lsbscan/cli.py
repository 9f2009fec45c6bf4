# Command line entry points (flask analyze / lsbscan analyze)
import json

import click
from flask import current_app
from flask.cli import FlaskGroup, with_appcontext

from .imaging import ImageDecodeError, analyze_image


@click.command('analyze')
@click.argument('images', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Print the results as a JSON list.')
@with_appcontext
def analyze_command(images, as_json):
    """Run the chi-square LSB attack on one or more image files."""
    reports = []
    failed = 0
    for path in images:
        current_app.logger.debug(f'CLI analysis of {path}')
        try:
            decoded, result = analyze_image(path)
        except ImageDecodeError as e:
            # Keep going so one bad file does not hide the other results
            failed += 1
            current_app.logger.debug(f'CLI analysis of {path} failed: {e}')
            if as_json:
                reports.append({'path': path, 'error': str(e)})
            else:
                click.echo(f'Error: {path}: {e}', err=True)
            continue
        report = result.to_dict()
        report.update({'path': path, 'width': decoded.width, 'height': decoded.height})
        reports.append(report)
        if not as_json:
            click.echo(f'{path}: {result.status.value} (probability={result.probability:.4f}) - {result.message}')
    if as_json:
        click.echo(json.dumps(reports, indent=2))
    if failed:
        click.get_current_context().exit(1)


def _create_app():
    from . import create_app
    return create_app()


@click.group(cls=FlaskGroup, create_app=_create_app)
def main():
    """Management script for the LSB steganalysis service."""
