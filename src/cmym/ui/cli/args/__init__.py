"""Command line argument handling package."""

from cmym.ui.cli.args.options import CLIArgs, ReviewArgs, StagesArgs
from cmym.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "ReviewArgs", "StagesArgs"]
