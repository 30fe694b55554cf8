import logging
import sys
from pathlib import Path

import click

from jsminify.minify import Minifier
from jsminify.report import format_json, format_text
from jsminify.runner import (
    DEFAULT_INTERVAL,
    FILE_ERRORS,
    minify_directory,
    process_file,
    watch_directory,
)

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    '-i', '--input', 'input_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Input JavaScript file or directory.',
)
@click.option(
    '-o', '--output', 'output_path',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Output file path (single file only, default <name>.min.js).',
)
@click.option('-w', '--watch', is_flag=True, help='Watch a directory and re-minify changed files.')
@click.option('--preserve-license', is_flag=True, help='Keep a leading /*! ... */ comment.')
@click.option('--shorten-vars', is_flag=True, help='Rename var/let/const bindings to short names.')
@click.option('--json', 'json_output', is_flag=True, help='Print statistics as JSON.')
@click.option('--workers', type=click.IntRange(min=1), help='Worker threads for directory mode.')
@click.option(
    '--interval', type=click.FloatRange(min=0, min_open=True), default=DEFAULT_INTERVAL,
    show_default=True, help='Polling interval in seconds for --watch.',
)
@click.option('--debug', is_flag=True, help='Trace each minification stage to stderr.')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
def cli(input_path, output_path, watch, preserve_license, shorten_vars, json_output,
        workers, interval, debug, verbose):
    """Minify JavaScript files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    minifier = Minifier(
        preserve_license=preserve_license,
        shorten_vars=shorten_vars,
        debug=sys.stderr if debug else None,
    )

    if not input_path.is_dir():
        if watch:
            raise click.UsageError('--watch needs a directory as --input')
        try:
            stats = process_file(input_path, output_path, minifier)
        except FILE_ERRORS as e:
            raise click.ClickException(f'Error processing {input_path}: {e}')
        click.echo(format_json(stats) if json_output else format_text(stats), nl=json_output)
        return

    if output_path is not None:
        raise click.UsageError('--output only applies to a single input file')

    if watch:
        on_stats = (lambda stats: click.echo(format_json(stats))) if json_output else None
        try:
            watch_directory(input_path, minifier, interval=interval, on_stats=on_stats)
        except KeyboardInterrupt:
            logger.info("Stopped watching %s", input_path)
        return

    all_stats = []
    for stats in minify_directory(input_path, minifier, workers=workers):
        all_stats.append(stats)
        if not json_output:
            click.echo(format_text(stats))
    if json_output:
        click.echo(format_json(all_stats))


def main():
    cli(auto_envvar_prefix='JSMINIFY')


if __name__ == '__main__':
    main()
