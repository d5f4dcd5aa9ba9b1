# Copyright 2026 BrainX Ecosystem Limited. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

"""CLI entry point for brainrand.

Usage:
    brainrand build-tables [--output PATH]
    brainrand generate [--seed S] [--subsequence K] [--offset O] [-n N] [--output FILE]
"""

import argparse
import json
import sys
import time
from typing import List, Optional

__all__ = ['main']


def _uint64(text: str) -> int:
    # Accept decimal or 0x-prefixed values.
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid integer: {text!r}')
    if value < 0 or value >= 1 << 64:
        raise argparse.ArgumentTypeError(f'value must be in [0, 2^64): {text}')
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='brainrand',
        description='BrainRand: parallel-stream XORWOW random numbers with skip-ahead.',
    )
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    build = subparsers.add_parser(
        'build-tables',
        help='Precompute the XORWOW jump tables and write them to the cache file.',
    )
    build.add_argument(
        '--output',
        type=str,
        default=None,
        help='Destination .npz path (defaults to the brainrand cache path).',
    )

    gen = subparsers.add_parser(
        'generate',
        help='Print uint32 draws of one XORWOW stream.',
    )
    gen.add_argument('--seed', type=_uint64, default=0, help='64-bit seed.')
    gen.add_argument('--subsequence', type=_uint64, default=0, help='Subsequence index.')
    gen.add_argument('--offset', type=_uint64, default=0, help='Draws to skip inside the subsequence.')
    gen.add_argument('-n', '--count', type=int, default=10, help='Number of draws to print.')
    gen.add_argument('--output', type=str, default=None, help='Output file path for JSON results.')

    return parser


def _run_build_tables(args) -> int:
    """Run the build-tables command."""
    from brainrand import config
    from brainrand._precomputed import build_xorwow_jump_tables

    path = args.output or config.get_table_cache_path()
    start = time.perf_counter()
    tables = build_xorwow_jump_tables()
    elapsed = time.perf_counter() - start
    print(f"Built step and sequence tables {tables.step.shape} in {elapsed:.2f} s")

    if not config.write_table_file(path, tables.step, tables.sequence):
        print(f"Could not write jump tables to {path}.", file=sys.stderr)
        return 1
    print(f"Jump tables written to {path}")
    return 0


def _run_generate(args) -> int:
    """Run the generate command."""
    from brainrand._engine import XorwowEngine

    if args.count < 0:
        print(f"--count must be non-negative, got {args.count}.", file=sys.stderr)
        return 1

    engine = XorwowEngine(args.seed, args.subsequence, args.offset)
    values = [engine.next() for _ in range(args.count)]

    if args.output:
        output_data = {
            'parameters': {
                'seed': args.seed,
                'subsequence': args.subsequence,
                'offset': args.offset,
                'count': args.count,
            },
            'values': values,
            'final_state': {'x': list(engine.x), 'd': engine.d},
        }
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(output_data, f, indent=2)
            f.write('\n')
        print(f"Results written to {args.output}")
    else:
        for value in values:
            print(value)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == 'build-tables':
        return _run_build_tables(args)
    if args.command == 'generate':
        return _run_generate(args)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
