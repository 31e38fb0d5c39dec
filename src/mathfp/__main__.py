## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# mathfp — A small expression language for mathematical modeling, functional and closure-based.
#

import sys
import time
from dataclasses import dataclass

import click

from .types import nil
from .errors import MathError
from .parser import format_source_context
from .formatting import write_without_ansi, format_value
from .interpreter import DEFAULT_MAX_DEPTH
from .session import Session


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    stats: bool
    plain: bool
    max_depth: int


class MathRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            sys.stdout.write = write_without_ansi(sys.stdout.write)
            sys.stderr.write = write_without_ansi(sys.stderr.write)

        self.total_stats = {'steps': 0, 'calls': 0, 'depth': 0, 'start': time.time()} if self.stats_enabled else None
        self.session = Session(max_depth=config.max_depth, verbosity=self.verbose, stats=self.total_stats)
        self.failure = False

    def _report(self, exc: MathError, filename: str, source: str) -> None:
        print(exc.diagnostic, file=sys.stderr)
        if exc.line is not None:
            context = format_source_context(filename, exc.line, exc.column, exc.token, source=source)
            print(context, end='', file=sys.stderr)

    def execute(self, source: str, filename: str) -> bool:
        """Batch mode: the whole source is one input, the first error ends the run."""
        try:
            value = self.session.run(source, filename=filename)
        except MathError as exc:
            self._report(exc, filename, source)
            self.failure = True
            return False
        if value is not nil:
            print(format_value(value))
        return True

    def repl(self) -> None:
        interactive = sys.stdin.isatty()
        if interactive:
            if sys.platform != "win32": import readline
            print('mathfp - Expression language REPL; type Ctrl+D to exit.')

        while True:
            try:
                line = input("\033[36m>>> \033[0m" if interactive else "")
            except (KeyboardInterrupt, EOFError):
                if interactive: print("")
                break

            if len(line.strip()) == 0: continue
            if line.strip() in ('quit', 'exit'): break

            try:
                value = self.session.run(line, filename='<REPL>')
            except MathError as exc:
                self._report(exc, '<REPL>', line)
                continue
            except KeyboardInterrupt:
                print("\033[33mInterrupted.\033[0m", file=sys.stderr)
                continue
            if value is not nil:
                print(format_value(value))

    def finalize(self) -> int:
        if self.total_stats and self.session.inputs > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"call\t\033[97m{self.total_stats['calls']:,}\033[0m")
            print(f"depth\t\033[97m{self.total_stats['depth']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('script', type=click.File('r', encoding='utf-8'), required=False)
@click.option('--command', '-c', default=None, help='Evaluate the given source once, as a script.')
@click.option('--verbose', '-v', default=0, count=True, help='Trace function calls (-v) or every evaluation step (-vv).')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from all output.')
@click.option('--max-depth', default=DEFAULT_MAX_DEPTH, show_default=True, type=click.IntRange(min=1),
              help='Maximum number of nested function calls.')
@click.pass_context
def cli(ctx: click.Context, script, command: str | None, verbose: int, stats: bool, plain: bool, max_depth: int) -> None:
    """Run SCRIPT in batch mode, or start an interactive session when no SCRIPT is given."""
    config = RuntimeConfig(verbose=verbose, stats=stats, plain=plain, max_depth=max_depth)
    runner = MathRunner(config)

    if command is not None:
        runner.execute(command, '<COMMAND>')
    elif script is not None:
        runner.execute(script.read(), script.name or '<STDIN>')
    else:
        runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='mathfp')


if __name__ == "__main__":
    main()
