"""
AtlasPacker CLI - Command-line interface for building texture atlases
"""

import logging
import sys

import click
from pydantic import ValidationError

from atlaspacker import __version__
from atlaspacker.client import AtlasBuilder
from atlaspacker.config import AtlasConfig
from atlaspacker.exceptions import (
    AtlasError,
    CapacityExceeded,
    EncodeFailure,
    EncoderNotFound,
    RectangleTooLarge,
)
from atlaspacker.packing.engine import DEFAULT_BIN_SIZE, DEFAULT_MAX_BINS


@click.command()
@click.version_option(version=__version__)
@click.option('-i', '--input-folders', 'input_folders', multiple=True, required=True,
              type=click.Path(file_okay=False), help='Folder of source images (repeatable)')
@click.option('-a', '--atlas-name', required=True, help='Base name of the .ktx2 and description files')
@click.option('-s', '--sheet-size', default=DEFAULT_BIN_SIZE, show_default=True, type=click.IntRange(min=1),
              help='Side length of each square sheet in pixels')
@click.option('-o', '--output-dir', required=True, type=click.Path(file_okay=False), help='Output directory')
@click.option('--max-bins', default=DEFAULT_MAX_BINS, show_default=True, type=click.IntRange(min=1),
              help='Most sheets to try before giving up')
@click.option('--toktx', 'toktx_path', default=None, help='Path to the toktx executable (default: $TOKTX_PATH or PATH)')
@click.option('--skip-encode', is_flag=True, help='Write sheets and description without running toktx')
@click.option('--format', 'description_format', type=click.Choice(['ron', 'json']), default='ron',
              show_default=True, help='Description file format')
@click.option('--workers', type=click.IntRange(min=1), default=None, help='Threads used to composite sheets')
@click.option('--verbose', '-v', is_flag=True, help='Show detailed progress')
def cli(input_folders, atlas_name, sheet_size, output_dir, max_bins, toktx_path,
        skip_encode, description_format, workers, verbose):
    """
    AtlasPacker - Pack folders of images into a layered texture atlas.

    Every image is converted to luminance+alpha, packed into square sheets,
    merged into a KTX2 texture array with toktx and described in a
    .ron (or .json) file.

    Examples:
        atlaspacker -i sprites/ui -i sprites/icons -a ui -o build
        atlaspacker -i fonts -a glyphs -s 1024 -o build --format json
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )

    try:
        config = AtlasConfig(
            input_folders=list(input_folders),
            output_dir=output_dir,
            atlas_name=atlas_name,
            sheet_size=sheet_size,
            max_bins=max_bins,
            encoder_path=toktx_path,
            skip_encode=skip_encode,
            description_format=description_format,
            max_workers=workers,
        )

        if verbose:
            click.echo(f"Input folders: {', '.join(str(f) for f in config.input_folders)}")
            click.echo(f"Sheet size: {config.sheet_size}x{config.sheet_size}")

        result = AtlasBuilder(config).build()

        click.echo(f"Packed {len(result.entries)} images into {result.bin_count} sheet(s)")
        if verbose:
            for path in result.sheet_paths:
                click.echo(f"  {path}")
        if result.encoded:
            click.echo(f"Texture array: {result.texture_path}")
        click.secho(f"✓ Success! Atlas description saved to {result.description_path}", fg='green')

    except ValidationError as e:
        click.secho(f"Invalid configuration: {e}", fg='red', err=True)
        sys.exit(1)
    except RectangleTooLarge as e:
        click.secho(f"Packing Error: {e}", fg='red', err=True)
        sys.exit(1)
    except CapacityExceeded as e:
        click.secho(f"Packing Error: {e}", fg='red', err=True)
        sys.exit(1)
    except EncoderNotFound as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except EncodeFailure as e:
        click.secho(f"Encoder Error: {e}", fg='red', err=True)
        sys.exit(1)
    except AtlasError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except OSError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
