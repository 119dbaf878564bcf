#!/usr/bin/env python3
"""
ISEA3H grid command line tool.

Looks up cells for locations, enumerates cells for bounding boxes and named
regions, and reports the structural constants of a resolution. All results are
written to stdout as JSON.
"""

import click
import logging
from typing import Optional

from .config import Config, config as default_config
from .exceptions import GridError
from .grid_systems import GridFactory, BoundsManager
from .infrastructure.logging import setup_simple_logging
from .utils import dumps

logger = logging.getLogger(__name__)

resolution_option = click.option('--resolution', '-r', type=int, default=None,
                                  help='Resolution level (default: grids.default_resolution)')


def _grid(ctx, resolution: Optional[int]):
    settings = ctx.obj['config']
    if resolution is None:
        resolution = settings.get('grids.default_resolution', 6)
    return ctx.obj['factory'].get_grid(resolution)


def _report_cells(cells, list_cells: bool, **summary):
    output = {**summary, 'count': len(cells)}
    if list_cells:
        output['cells'] = sorted(cells, key=lambda cell: (cell.lat, cell.lon))
    click.echo(dumps(output))


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML file overriding the default configuration')
@click.pass_context
def cli(ctx, verbose, config_file):
    """ISEA3H discrete global grid CLI."""
    settings = Config(config_file) if config_file else default_config
    setup_simple_logging('DEBUG' if verbose else 'WARNING')
    ctx.obj = {'config': settings, 'factory': GridFactory(settings)}


@cli.command()
@resolution_option
@click.pass_context
def info(ctx, resolution):
    """Show cell counts, areas and sizes for a resolution."""
    try:
        click.echo(dumps(_grid(ctx, resolution).calculate_statistics()))
    except GridError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


@cli.command(context_settings={'ignore_unknown_options': True})
@resolution_option
@click.argument('lat', type=float)
@click.argument('lon', type=float)
@click.pass_context
def cell(ctx, resolution, lat, lon):
    """Find the cell containing LAT LON."""
    try:
        click.echo(dumps(_grid(ctx, resolution).cell_for_location(lat, lon)))
    except GridError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


@cli.command()
@resolution_option
@click.option('--lat0', type=float, required=True, help='First latitude')
@click.option('--lat1', type=float, required=True, help='Second latitude')
@click.option('--lon0', type=float, required=True, help='First longitude')
@click.option('--lon1', type=float, required=True, help='Second longitude')
@click.option('--list', 'list_cells', is_flag=True, help='Include the cells, not only their number')
@click.option('--strict', is_flag=True, help='Only cells centered inside the box')
@click.pass_context
def bound(ctx, resolution, lat0, lat1, lon0, lon1, list_cells, strict):
    """Enumerate the cells of a latitude/longitude box."""
    try:
        grid = _grid(ctx, resolution)
        cells = grid.cells_for_bound(lat0, lat1, lon0, lon1)
        if strict:
            cells = {c for c in cells
                     if min(lat0, lat1) <= c.lat <= max(lat0, lat1) and min(lon0, lon1) <= c.lon <= max(lon0, lon1)}
        _report_cells(cells, list_cells, resolution=grid.resolution,
                      bounds={'lat0': lat0, 'lat1': lat1, 'lon0': lon0, 'lon1': lon1})
    except GridError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


@cli.command()
@resolution_option
@click.argument('name')
@click.option('--list', 'list_cells', is_flag=True, help='Include the cells, not only their number')
@click.option('--strict', is_flag=True, help='Only cells centered inside the region')
@click.pass_context
def region(ctx, resolution, name, list_cells, strict):
    """Enumerate the cells of a named region or a 'minx,miny,maxx,maxy' box."""
    try:
        grid = _grid(ctx, resolution)
        bounds_manager = BoundsManager(ctx.obj['config'])
        bounds_def = bounds_manager.get_bounds(name)
        cells = grid.cells_for_region(bounds_def, bounds_manager)
        if strict:
            cells = bounds_manager.cells_within(cells, bounds_def)
        _report_cells(cells, list_cells, resolution=grid.resolution,
                      region=bounds_def.name, bounds=list(bounds_def.bounds),
                      area_km2=bounds_def.area_km2)
    except (GridError, ValueError) as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


@cli.command()
@click.pass_context
def regions(ctx):
    """List the available named regions."""
    click.echo(dumps(BoundsManager(ctx.obj['config']).list_available()))


if __name__ == '__main__':
    cli()
