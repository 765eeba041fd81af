"""
mcdr-setup — CLI entrypoint.

Usage:
    mcdr-setup
    python -m mcdr_setup

Everything happens in the interactive menu; there are no options.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from mcdr_setup import __version__
from mcdr_setup.core import context, i18n
from mcdr_setup.core.config.loader import load_config
from mcdr_setup.core.errors import ConfigError
from mcdr_setup.core.observability.logging_config import setup_logging_from_env

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """Set up MCDReforged in the current folder."""
    from mcdr_setup.core.use_cases.wizard import run_wizard
    from mcdr_setup.ui.cli.menu import ClickUI

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging_from_env()
    logger.debug("mcdr-setup %s starting", __version__)

    directory = Path.cwd()
    context.set_working_dir(directory)
    ui = ClickUI()

    try:
        config = load_config()
    except ConfigError as e:
        i18n.set_locale(i18n.detect_locale())
        logger.error("%s", e)
        ui.fatal(str(e))
        sys.exit(1)

    i18n.set_locale(config.locale or i18n.detect_locale())

    try:
        code = run_wizard(config, context.get_working_dir(), ui)
    except click.Abort:
        # Ctrl-C or end of input at a prompt counts as leaving the menu
        logger.debug("Cancelled by the operator")
        click.echo()
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    cli()
