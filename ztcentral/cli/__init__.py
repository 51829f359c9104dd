"""
Command line interface for the ztcentral client.
"""
import sys

from ztcentral.cli.commands import main_cli


def main() -> None:
    sys.exit(main_cli())


__all__ = ['main', 'main_cli']
