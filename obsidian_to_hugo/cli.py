"""Command line entry point for obsidian-to-hugo."""

from pathlib import Path
from typing import Optional

import click

from obsidian_to_hugo import __version__
from obsidian_to_hugo.config import ConverterConfig, create_converter_from_config, load_config
from obsidian_to_hugo.core.models import ConfigError


@click.command()
@click.version_option(version=__version__, prog_name="obsidian-to-hugo")
@click.option("--vault-path", type=click.Path(path_type=Path), default=None,
              help="Path to the Obsidian vault.")
@click.option("--content-path", type=click.Path(path_type=Path), default=None,
              help="Path to the Hugo content output directory (does not have to be the content root).")
@click.option("--clear-output-dir", is_flag=True,
              help="Remove everything in the content path before converting.")
@click.option("--workers", "max_workers", type=click.IntRange(min=1), default=None,
              help="Number of files converted in parallel.")
@click.option("--no-git-dates", is_flag=True,
              help="Do not look up missing dates in git history.")
@click.option("-c", "--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="YAML config file. Flags override its values.")
def main(
    vault_path: Optional[Path],
    content_path: Optional[Path],
    clear_output_dir: bool,
    max_workers: Optional[int],
    no_git_dates: bool,
    config_path: Optional[Path],
) -> None:
    """Convert an Obsidian vault into Hugo content."""
    try:
        config = load_config(config_path) if config_path else ConverterConfig()
    except (ConfigError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if vault_path is not None:
        config.vault_path = vault_path
    if content_path is not None:
        config.content_path = content_path
    if clear_output_dir:
        config.clear_output_dir = clear_output_dir
    if max_workers is not None:
        config.max_workers = max_workers
    if no_git_dates:
        config.git_dates = False

    try:
        converter = create_converter_from_config(config)
    except ConfigError as e:
        raise click.UsageError(str(e))

    try:
        result = converter.convert()
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    for failure in result.failures:
        click.echo(f"Warning: Failed to convert {failure.path}: {failure.error}", err=True)

    click.echo(
        f"Converted {len(result.converted)} notes, copied {len(result.copied)} files"
        f" into {config.content_path}"
    )

    if not result.ok:
        click.echo(f"{len(result.failures)} files failed to convert", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
