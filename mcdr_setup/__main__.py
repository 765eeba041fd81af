"""Allow ``python -m mcdr_setup``."""

from mcdr_setup.main import cli

cli()
