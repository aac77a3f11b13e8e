import logging
import os
import sys

import click

from .constants import QOI_LINEAR, QOI_SRGB
from .converter import convert, is_qoi_path

logger = logging.getLogger(__name__)

COLORSPACES = {"srgb": QOI_SRGB, "linear": QOI_LINEAR}


@click.command()
@click.option("--colorspace", type=click.Choice(sorted(COLORSPACES)), default=None, help="Colorspace flag stored in a QOI output. Defaults to the input's flag, or srgb.")
@click.option("--channels", type=click.Choice(["3", "4"]), default=None, help="Force RGB (3) or RGBA (4) output.")
@click.option("-v", "--verbose", count=True, help="Log progress; repeat for debug output.")
@click.argument("infile", type=click.Path(dir_okay=False))
@click.argument("outfile", type=click.Path(dir_okay=False))
def main(colorspace, channels, verbose, infile, outfile):
    """
    Convert INFILE to OUTFILE, where one of them is a .qoi file.

    \b
    Examples:
      qoiconv input.png output.qoi
      qoiconv input.qoi output.png
    """
    logging.basicConfig(
        level=logging.WARNING - 10 * min(verbose, 2),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not (is_qoi_path(infile) or is_qoi_path(outfile)):
        raise click.UsageError("INFILE or OUTFILE must be a .qoi file")

    if not os.path.isfile(infile):
        click.echo(f"Couldn't load/decode {infile}", err=True)
        sys.exit(1)

    try:
        desc = convert(
            infile,
            outfile,
            colorspace=COLORSPACES.get(colorspace),
            channels=int(channels) if channels else None,
        )
    except (ValueError, OSError) as e:
        # covers QOIError and Pillow's "unknown file extension"
        logger.debug("Conversion failed", exc_info=True)
        click.echo(f"Couldn't convert {infile} to {outfile}: {e}", err=True)
        sys.exit(1)

    click.echo(f"{infile} -> {outfile}: {desc.width}x{desc.height} Channels: {desc.channels}")


if __name__ == "__main__":
    main()
