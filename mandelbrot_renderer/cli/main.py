"""
Command-line interface for Mandelbrot rendering.

Flags mirror the classic single-command renderer: -x/-y/-z pick the view,
-i the iteration budget, -W/-H the image size, -m the color frequency and
--outside/--inside/--second the three colors.
"""

import sys
import logging
import time

import click

from .. import __version__
from ..api import MandelbrotRenderer
from ..acceleration import is_numba_available
from ..io.config import ConfigManager, load_config_from_args, parse_color

logger = logging.getLogger(__name__)


def _color_option(ctx, param, value):
    """Click callback turning "r,g,b" into an RGB tuple."""
    if value is None:
        return None
    try:
        return parse_color(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--config', type=click.Path(exists=True, dir_okay=False), help='JSON configuration file')
@click.option('--preset', help='View preset to start from')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def main(ctx, version, config, preset, verbose, quiet):
    """
    Mandelbrot Renderer - escape-time fractal images with periodic coloring.
    """
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO,
                            format='%(levelname)s: %(message)s')

    if version:
        click.echo(f"Mandelbrot Renderer v{__version__}")
        click.echo(f"Python: {sys.version}")
        click.echo(f"Numba acceleration: {'Available' if is_numba_available() else 'Not available'}")
        if ctx.invoked_subcommand is None:
            ctx.exit(0)

    if ctx.invoked_subcommand is None and not version:
        click.echo(ctx.get_help())
        ctx.exit(0)

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config
    ctx.obj['preset'] = preset
    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet


@main.command()
@click.option('-x', 'x', type=float, help='x position (default -0.75)')
@click.option('-y', 'y', type=float, help='y position (default 0)')
@click.option('-z', 'zoom', type=click.FloatRange(min=0, min_open=True), help='zoom (default 3)')
@click.option('-i', 'max_iterations', type=click.IntRange(min=1), help='iterations (default 100)')
@click.option('-W', 'width', type=click.IntRange(min=1), help='image width (default 1024)')
@click.option('-H', 'height', type=click.IntRange(min=1), help='image height (default 1024)')
@click.option('-m', 'multiplier', type=float, help='frequency of inner color switches (default 25)')
@click.option('--outside', 'outside_color', callback=_color_option, metavar='R,G,B',
              help='outside color (default 0,0,0)')
@click.option('--inside', 'inside_color', callback=_color_option, metavar='R,G,B',
              help='inside color (default 255,0,0)')
@click.option('--second', 'second_color', callback=_color_option, metavar='R,G,B',
              help='second inside color (default 255,0,255)')
@click.option('-o', 'output', type=click.Path(dir_okay=False), default='output.png',
              show_default=True, help='output filename')
@click.option('--numba/--no-numba', 'use_numba', default=None, help='Use the Numba JIT backend')
@click.option('--no-metadata', is_flag=True, help='Do not embed render metadata in the image')
@click.pass_context
def render(ctx, output, no_metadata, **kwargs):
    """
    Render a Mandelbrot image to OUTPUT (PNG, TIFF, JPEG or BMP).
    """
    obj = ctx.obj or {}
    try:
        render_config = load_config_from_args(obj.get('config_file'), obj.get('preset'))

        overrides = {k: v for k, v in kwargs.items() if v is not None}
        if no_metadata:
            overrides['save_metadata'] = False
        render_config = render_config.replace(**overrides)
    except (ValueError, OSError) as e:
        click.echo(f"Error: can't build configuration: {e}", err=True)
        sys.exit(1)

    def progress_callback(rows_done, total_rows):
        if rows_done == total_rows or rows_done % max(1, total_rows // 10) == 0:
            logger.debug(f"Progress: {rows_done / total_rows * 100:.1f}%")

    try:
        renderer = MandelbrotRenderer(render_config)

        if not obj.get('quiet'):
            click.echo(f"Rendering {render_config.width}x{render_config.height} "
                       f"({render_config.max_iterations} iterations)...")
        start_time = time.time()

        renderer.render_to_file(output, progress_callback)

        if not obj.get('quiet'):
            click.echo(f"Render complete: {time.time() - start_time:.2f}s")
            click.echo(f"Saved: {output}")

    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        if obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)


@main.command()
@click.pass_context
def list_presets(ctx):
    """List available view presets."""
    manager = ConfigManager()
    verbose = (ctx.obj or {}).get('verbose')

    click.echo("Available presets:")
    for name in manager.list_presets():
        preset = manager.get_preset(name)
        click.echo(f"  {name}")
        if verbose:
            if '_description' in preset:
                click.echo(f"    Description: {preset['_description']}")
            for key, value in preset.items():
                if not key.startswith('_'):
                    click.echo(f"    {key}: {value}")


@main.command()
@click.argument('output', type=click.Path(dir_okay=False), default='mandelbrot_config.json')
@click.pass_context
def init_config(ctx, output):
    """
    Write a JSON configuration template with the current settings.

    OUTPUT defaults to mandelbrot_config.json.
    """
    obj = ctx.obj or {}
    manager = ConfigManager()
    try:
        config = load_config_from_args(obj.get('config_file'), obj.get('preset'))
        path = manager.export_config_template(output, config)
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Configuration template created: {path}")


if __name__ == '__main__':
    main()
