"""
mtok - Monster Tokenizer Command-Line Interface
===============================================

This module implements a command-line tool that prints the tokens of a
Monster script, one per line. It is mainly useful for debugging the
tokenizer and for checking how a tricky line is split up.

Output Format
-------------
Each token is printed as:

    LINE:KIND:TEXT

String literals get a fourth field with their decoded value, spelled
with escapes so that control characters stay visible:

    3:STRING_LITERAL:r"c:\\dir":"c:\\\\dir"

Tokens that start a line are marked with a leading '*' when --mark-lines
is given.

Usage Examples
--------------
Tokenize a file:
    $ mtok script.mn

Tokenize one line:
    $ mtok -e 'x = "a\\tb" !=i= y'

Without the case-insensitive operators:
    $ mtok --no-ci-ops script.mn

Verbose mode (debug logging):
    $ mtok -v script.mn
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from monster import __version__
from monster.cli.errors import handle_cli_exception
from monster.compiler import TT, Token, tokenize_file, tokenize_line
from monster.compiler.strings import escape_string
from monster.options import TokenizerOptions

logger = logging.getLogger(__name__)


def format_token(token: Token, mark_lines: bool = False) -> str:
    """Format a token as LINE:KIND:TEXT[:DECODED]."""
    text = f"{token.line}:{token.type.name}:{token.text}"
    if token.type is TT.STRING_LITERAL:
        text += f":{escape_string(token.decoded)}"
    if mark_lines:
        text = ("*" if token.starts_line else " ") + text
    return text


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-e", "--expr",
    type=str,
    default=None,
    help="Tokenize this single line instead of a file",
)
@click.option(
    "--ci-ops/--no-ci-ops",
    default=None,
    help="Recognize the =i= and !=i= operator family "
         "(default: on, or MONSTER_CI_STRING_OPS)",
)
@click.option(
    "--skip-directives/--keep-directives",
    default=None,
    help="Ignore lines starting with '#' (default: on, or MONSTER_SKIP_HASHES)",
)
@click.option(
    "--mark-lines",
    is_flag=True,
    help="Prefix tokens that start a line with '*'",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mtok")
def main(
    input_file: Optional[Path],
    expr: Optional[str],
    ci_ops: Optional[bool],
    skip_directives: Optional[bool],
    mark_lines: bool,
    verbose: bool,
) -> None:
    """
    Print the tokens of a Monster script.

    INPUT_FILE is the script to tokenize. Use -e to tokenize a single
    line given on the command line instead.

    \b
    Examples:
        mtok script.mn               # One token per line
        mtok -e 'a !=i= b'           # Tokenize a single line
        mtok --no-ci-ops script.mn   # Without =i= operators
    """
    if input_file is None and expr is None:
        raise click.UsageError("give an INPUT_FILE or use -e/--expr")
    if input_file is not None and expr is not None:
        raise click.UsageError("INPUT_FILE and -e/--expr cannot be combined")

    setup_logging(verbose)

    options = TokenizerOptions.from_env()
    if ci_ops is not None:
        options = replace(options, case_insensitive_comparison_operators=ci_ops)
    if skip_directives is not None:
        options = replace(options, skip_directive_lines=skip_directives)
    logger.debug(f"Options: {options}")

    try:
        if expr is not None:
            tokens = tokenize_line(expr, options)
        else:
            tokens = tokenize_file(input_file, options)

        for token in tokens:
            click.echo(format_token(token, mark_lines))

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
