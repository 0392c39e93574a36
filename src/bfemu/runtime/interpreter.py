import sys
from pathlib import Path
import logging as lg
import traceback
from typing import BinaryIO

import click

from bfemu.common.hwconf import TAPE_SIZE
from bfemu.runtime.settings import RunSettings, Strategy, Bounds, Eof
import bfemu.runtime.program as program
import bfemu.runtime.engine as engine


EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INVALID_FILE = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100

USAGE = '''Usage

    bfemu <path-to-source>
'''


def execute(prog: program.Program, istream: BinaryIO, ostream: BinaryIO,
            settings: RunSettings | None = None):
    try:
        engine.Engine(prog, istream, ostream, settings).run()

    finally:
        prog.close()


def execute_file(path: Path, istream: BinaryIO, ostream: BinaryIO,
                 settings: RunSettings | None = None):
    if settings is None:
        settings = RunSettings()

    prog = program.open_program(path, settings.strategy)
    execute(prog, istream, ostream, settings)


def choices(enum) -> click.Choice:
    return click.Choice([e.value for e in enum])


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-s', '--strategy', type=choices(Strategy), default=Strategy.STREAM.value,
              help='Read the source on demand or decode it up front')
@click.option('--tape-size', type=click.IntRange(min=1), default=TAPE_SIZE,
              help='Number of tape cells')
@click.option('--bounds', type=choices(Bounds), default=Bounds.WRAP.value,
              help='What happens when the cursor leaves the tape')
@click.option('--eof', type=choices(Eof), default=Eof.KEEP.value,
              help='Cell value after reading past the end of input')
@click.argument('source', type=Path, required=False)
def run(verbose: bool, strategy: str, tape_size: int, bounds: str, eof: str,
        source: Path | None):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.WARNING)

    if source is None:
        click.echo(USAGE, err=True)
        sys.exit(EXIT_USAGE)

    if not source.is_file():
        click.echo('Invalid input file.', err=True)
        sys.exit(EXIT_INVALID_FILE)

    settings = RunSettings().update(
        strategy=strategy,
        tape_size=tape_size,
        bounds=bounds,
        eof=eof
    )

    istream = sys.stdin.buffer
    ostream = sys.stdout.buffer

    try:
        execute_file(source, istream, ostream, settings)
        sys.exit(EXIT_OK)

    except engine.ExecutionError as e:
        lg.info(f'Execution halted on error {e}')
        click.echo(f'Error: {e}', err=True)
        sys.exit(EXIT_EXEC_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
