"""mcdr-setup — interactive setup wizard for MCDReforged."""

__version__ = "0.1.0"
