"""
RBLScope command line entry point.
"""

import click

from rblscope import __version__
from rblscope.config import get_config
from rblscope.logging_config import setup_logging
from rblscope.rbl.cli import rbl


@click.group()
@click.version_option(__version__, prog_name="rblscope")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also log to this file")
def main(debug: bool, log_file: str | None):
    """DNS blacklist diagnostics."""
    config = get_config()
    setup_logging(
        level="DEBUG" if debug else config.log_level,
        log_file=log_file or config.log_file,
    )


main.add_command(rbl)


if __name__ == "__main__":
    main()
