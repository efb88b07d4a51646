"""Click base classes shared by every pfm command.

``PfmCommand`` and ``PfmGroup`` accept ``-h`` as well as ``--help`` and
take an optional ``examples`` block.  When one is given the command grows
an eager ``--examples`` flag that prints the block and exits, and the help
epilog points at it.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


def _examples_option(examples: str) -> click.Option:
    text = textwrap.dedent(examples).strip("\n")

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(text)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples and exit.",
    )


class _ExamplesMixin:
    """Handle the ``examples`` keyword for a Click command class."""

    examples: str | None
    params: list[click.Parameter]
    epilog: str | None

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(_examples_option(examples))
        if self.epilog is None:
            self.epilog = "Run with --examples for sample invocations."


class PfmCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("context_settings", CONTEXT_SETTINGS)
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class PfmGroup(_ExamplesMixin, click.Group):
    """Root group; subcommands default to :class:`PfmCommand`."""

    command_class = PfmCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("context_settings", CONTEXT_SETTINGS)
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
