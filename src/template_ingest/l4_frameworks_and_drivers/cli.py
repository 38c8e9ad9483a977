"""CLI entry point for template-ingest.

Fetches a template reference the same way the pipeline does and checks that
the buffer is importable. No composition engine is required.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from template_ingest import __version__
from template_ingest.l1_entities.progress import ProgressEvent, ProgressStage


def _make_progress_printer(quiet: bool):
    last = {'progress': -1}

    def _print(event: ProgressEvent) -> None:
        if event.stage is ProgressStage.WARNING:
            click.echo(f'Warning: {event.message}', err=True)
            return
        if quiet or event.progress == last['progress']:
            return
        last['progress'] = event.progress
        click.echo(f'[{event.progress:3d}%] {event.message}')

    return _print


@click.command()
@click.argument('reference')
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option('--base-url', default=None, help='Base URL for relative references (e.g. /templates/x.psd).')
@click.option(
    '--log-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Write a debug log into this directory.',
)
@click.option('-q', '--quiet', is_flag=True, help='Only print warnings and the summary.')
@click.version_option(version=__version__)
def cli(reference, config_path, base_url, log_dir, quiet):
    """template-ingest -- fetch a layered-document template and check it is importable.

    REFERENCE is a URL, a data: URI, or a local file path.
    """
    from template_ingest.l1_entities.errors import (  # noqa: PLC0415 -- deferred: not needed for --help
        CorruptBufferError,
        FetchError,
    )
    from template_ingest.l2_use_cases.utils.buffer_checks import (  # noqa: PLC0415 -- deferred: not needed for --help
        read_signature,
        size_mb,
        validate_buffer,
    )
    from template_ingest.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: httpx stack not loaded on --help
        DependencyContainer,
    )
    from template_ingest.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_ingest_config,
    )

    try:
        overrides: dict = {}
        if base_url:
            overrides['fetch'] = {'base_url': base_url}
        raw = DependencyContainer.config_loader().load_raw(config_path, overrides=overrides or None)
        config = build_ingest_config(raw)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    if log_dir:
        from template_ingest.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: only with --log-dir
            setup_file_logging,
        )

        setup_file_logging(Path(log_dir))

    on_progress = _make_progress_printer(quiet)
    local = Path(reference)
    try:
        if not reference.startswith('data:') and local.is_file():
            data = local.read_bytes()
        else:
            container = DependencyContainer(config)
            data = asyncio.run(container.fetcher.fetch(reference, on_progress))
    except FetchError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    if len(data) > config.fetch.large_file_warning_bytes:
        click.echo(f'Warning: Large file detected ({size_mb(data):.1f}MB).', err=True)

    try:
        validate_buffer(data, config.parse.min_buffer_bytes, config.parse.signature)
    except CorruptBufferError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    signature = read_signature(data)
    click.echo(f'Size:      {len(data)} bytes ({size_mb(data):.2f} MB)')
    click.echo(f'Signature: {signature!r}' + ('' if signature == config.parse.signature else ' (unexpected)'))
    click.echo(f'Cacheable: {"yes" if len(data) < config.cache.max_entry_bytes else "no"}')
