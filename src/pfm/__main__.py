"""Allow ``python -m pfm``."""

from pfm.cli import cli

cli(prog_name="pfm")
