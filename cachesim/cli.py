"""Command-line front end: replay a valgrind trace and print hit/miss/eviction counts.

    cachesim [-hv] -s <num> -E <num> -b <num> -t <file>
"""

import argparse
import logging
import sys

from cachesim.config import CacheConfig, Config
from cachesim.core.cache import Cache
from cachesim.core.simulator import AccessSimulator, describe
from cachesim.errors import CacheSimError
from cachesim.utils.trace_reader import TraceLoader, iter_lines

logger = logging.getLogger(__name__)

EPILOG = """\
Examples:
  linux>  %(prog)s -s 4 -E 1 -b 4 -t traces/yi.trace
  linux>  %(prog)s -v -s 8 -E 2 -b 4 -t traces/yi.trace
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog='cachesim',
        usage='%(prog)s [-hv] -s <num> -E <num> -b <num> -t <file>',
        description='Replay a memory trace against a set-associative LRU cache.',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-v', dest='verbose', action='store_true',
                        help='Optional verbose flag that displays trace info.')
    parser.add_argument('-s', dest='s', type=int, metavar='<num>',
                        help='Number of set index bits.')
    parser.add_argument('-E', dest='E', type=int, metavar='<num>',
                        help='Number of lines per set (i.e. associativity).')
    parser.add_argument('-b', dest='b', type=int, metavar='<num>',
                        help='Number of block offset bits.')
    parser.add_argument('-t', dest='trace', metavar='<file>',
                        help="Trace file ('-' reads standard input).")
    parser.add_argument('--plot', metavar='PATH',
                        help='Save a summary figure to PATH.')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: WARNING).')
    return parser


def _print_record(record, outcomes):
    # instruction fetches never touch the cache and are not echoed
    if outcomes:
        print(describe(record, outcomes))


def run(args):
    """Replay args.trace against a fresh cache and return the Summary."""
    cache = Cache(CacheConfig(args.s, args.E, args.b))
    simulator = AccessSimulator(cache)
    if args.trace == '-':
        if hasattr(sys.stdin, 'reconfigure'):
            sys.stdin.reconfigure(errors='replace')
        records = iter_lines(sys.stdin)
    else:
        records = TraceLoader().iter_records(args.trace)
    on_record = _print_record if args.verbose else None

    if not args.plot:
        return simulator.replay(records, on_record=on_record)

    from cachesim.utils.plotter import Plotter
    progress = list(simulator.iter_progress(records, Config.progress_interval, on_record=on_record))
    summary = simulator.summary()
    Plotter().plot_results(summary, progress, title=f"s={args.s} E={args.E} b={args.b}",
                           save_path=args.plot)
    logger.info("saved summary figure to %s", args.plot)
    return summary


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(levelname)s: %(message)s')

    if args.s is None or args.E is None or args.b is None or args.trace is None:
        print(f"{parser.prog}: Missing required command line argument")
        parser.print_help()
        return 1

    try:
        summary = run(args)
    except OSError as e:
        print(f"{args.trace}: {e.strerror or e}", file=sys.stderr)
        return 1
    except CacheSimError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return 1

    print(summary.format())
    return 0


if __name__ == '__main__':
    sys.exit(main())
