"""Replay a valgrind memory trace against a set-associative LRU cache.

    python main.py -s 4 -E 1 -b 4 -t traces/yi.trace

Run this script after installing the package with `pip install -e .`.
"""

import sys

from cachesim.cli import main


if __name__ == '__main__':
    sys.exit(main())
