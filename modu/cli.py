import logging
import sys
from pathlib import Path

import click

from modu.config import DEFAULT_SERVER_HOST, EvalConfig
from modu.errors import ModuError
from modu.interpreter import Interpreter, format_error
from modu.reader.parser import needs_more_input
from modu.server import EvalServer


@click.group()
@click.option('--verbose', '-v', default=0, count=True, help='Log tokens, statements and imports to stderr.')
def main(verbose: int):
    """Modu: a small dynamically-typed scripting language."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(file: Path):
    """Run a .modu file."""
    source = file.read_text(encoding='utf-8')
    interp = Interpreter(EvalConfig.for_script(file))
    try:
        interp.eval(source)
    except ModuError as err:
        click.echo("\n" + format_error(err, str(file), source))
        sys.exit(1)


@main.command()
def repl():
    """Interactive shell; a line with an open '{' keeps reading."""
    click.echo("Modu REPL")
    interp = Interpreter()
    stdin = click.get_text_stream('stdin')

    while True:
        click.echo("> ", nl=False)
        source = stdin.readline()
        if not source:
            break
        while needs_more_input(source):
            click.echo("|   ", nl=False)
            more = stdin.readline()
            if not more:
                break
            source += more
        if not source.strip():
            continue

        try:
            interp.eval(source)
        except ModuError as err:
            click.echo("\n" + format_error(err, "<stdin>", source) + "\n")
    click.echo()


@main.command()
@click.argument('port', type=int, required=False)
@click.option('--host', default=DEFAULT_SERVER_HOST, show_default=True, help='Interface to listen on.')
def server(port, host: str):
    """Serve POST /eval over HTTP (default port 2424, or MODU_SERVER_PORT)."""
    srv = EvalServer(host, port)
    click.echo(f"Modu server starting on port {srv.port}")
    srv.serve_forever()


if __name__ == '__main__':
    main()
