import logging
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from traceback import print_exc
from typing import Sequence

from xmlassert import Options, XmlAssertions
from xmlassert import logger
from xmlassert.reporters import TAPReporter


dbg = logger.debug
nfo = logger.info


WHITESPACE_OPTIONS = (
    'ignore_whitespace',
    'ignore_leading_whitespace',
    'ignore_trailing_whitespace',
    'ignore_surrounding_whitespace',
    'ignore_different_whitespace',
)


def parse_args(args: Sequence[str]) -> Namespace:
    parser = ArgumentParser(
        description='Compares an XML document against an expected one or, if none is '
                    'given, tests whether it is well-formed. The result is written to '
                    'stdout in the Test Anything Protocol.'
    )

    for option in WHITESPACE_OPTIONS:
        parser.add_argument(
            '--' + option.replace('_', '-'),
            action='store_true',
            default=False,
            help='Sets the comparison option {}.'.format(option),
        )
    parser.add_argument(
        '--description',
        '-d',
        default=None,
        help='The name of the reported test.',
    )
    parser.add_argument(
        '--not',
        action='store_true',
        default=False,
        dest='negate',
        help='Negates the assertion.',
    )
    parser.add_argument(
        '--trace',
        action='store_true',
        default=False,
        help='Adds a trace of the comparison to the diagnostics.',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='count',
        default=0,
        help='Increases the logging level; twice for debug.',
    )
    parser.add_argument('got', metavar='GOT', type=Path,
                        help='The document under test.')
    parser.add_argument('expected', metavar='EXPECTED', type=Path, nargs='?',
                        help='The expected document.')

    return parser.parse_args(args)


def setup_logging(verbosity: int) -> None:
    level = ('WARNING', 'INFO', 'DEBUG')[min(verbosity, 2)]
    console_log_handler = logging.StreamHandler(sys.stderr)
    console_log_handler.setLevel(level)
    logger.addHandler(console_log_handler)
    logger.setLevel(level)


def make_options(args: Namespace) -> Options:
    options = {x: getattr(args, x) for x in WHITESPACE_OPTIONS}
    options['description'] = args.description
    options['verbose'] = args.trace
    return Options.coerce(options)


def run_assertion(args: Namespace, assertions: XmlAssertions) -> bool:
    dbg('Reading {}.'.format(args.got))
    got = args.got.read_bytes()

    if args.expected is None:
        if args.negate:
            return assertions.isnt_well_formed_xml(got, args.description) is not None
        return assertions.is_well_formed_xml(got, args.description) is not None

    dbg('Reading {}.'.format(args.expected))
    expected = args.expected.read_bytes()
    options = make_options(args)
    if args.negate:
        return assertions.isnt_xml(got, expected, options) is not None
    return assertions.is_xml(got, expected, options) is not None


def main(args: Sequence[str] = None) -> None:
    try:
        if args is None:
            args = sys.argv[1:]
        args = parse_args(args)
        setup_logging(args.verbose)
        nfo('Starting')
        dbg(f'Invoked with args: {args}')
        reporter = TAPReporter(sys.stdout)
        passed = run_assertion(args, XmlAssertions(reporter))
        reporter.plan()
    except Exception:
        print_exc()
        raise SystemExit(2)
    raise SystemExit(0 if passed else 1)


if __name__ == '__main__':
    main()

__all__ = [main.__name__]
