# cli.py
# Command-line entry point:
#  - single search (size/target/engine) with optional plot and qiskit check
#  - benchmark sweep over sizes for both engines
from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from classical_grover.amplitude import MAX_SIZE, AmplitudeError
from classical_grover.benchmark import run_benchmark
from classical_grover.search import DEFAULT_ENGINE, ENGINES, ClassicalGroverSearch, SearchConfig
from classical_grover.service import (
    SearchRequest,
    build_response,
    is_valid_request,
    reject_response,
)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog='classical-grover',
        description="Classical Grover search over a segment-tree or Fenwick amplitude vector")
    ap.add_argument('--size', type=int, help='Search space size N')
    ap.add_argument('--target', type=int, help='Index to search for')
    ap.add_argument('--engine', choices=sorted(ENGINES), default=DEFAULT_ENGINE)
    ap.add_argument('--max-size', type=int, default=MAX_SIZE,
                    help='Largest accepted search space size')
    ap.add_argument('--plot', type=str, default=None,
                    help='Write a probability bar chart (PNG) to this path')
    ap.add_argument('--verify', action='store_true',
                    help='Compare final probabilities with a qiskit statevector run')
    ap.add_argument('--benchmark', type=int, nargs='+', metavar='N',
                    help='Time both engines over these sizes instead of a single search')
    ap.add_argument('--json', action='store_true', help='Print the response as JSON')
    ap.add_argument('--log-level', default='WARNING',
                    choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return ap


def _run_search(args) -> int:
    config = SearchConfig(engine=args.engine, max_size=args.max_size)
    request = SearchRequest(search_space_size=args.size, target_index=args.target)

    if not is_valid_request(request, config.max_size):
        response = reject_response()
        print(json.dumps(response.to_dict()) if args.json else response.message)
        return EXIT_REJECTED

    searcher = ClassicalGroverSearch(config)
    result, engine = searcher.execute_search_with_engine(args.size, args.target)
    response = build_response(result)

    if args.json:
        print(json.dumps(response.to_dict()))
    else:
        print(response.message)
        print(f"found={result.found_index} target={result.target_index} "
              f"iterations={result.iterations} engine={result.engine} "
              f"time={result.elapsed_ms:.2f} ms")

    if args.plot:
        from classical_grover.plotting import save_probability_plot
        try:
            save_probability_plot(engine.probabilities(), args.plot, target=args.target,
                                  title=f'{engine.name}: N={args.size}, target={args.target}')
        except OSError as e:
            logging.error(f"Could not write plot to {args.plot}: {e}")
            return EXIT_FAILED
        logging.info(f"Probability plot written to {args.plot}")

    if args.verify:
        from classical_grover.reference import compare_with_engine
        comparison = compare_with_engine(engine, args.target, result.iterations)
        if not comparison.matches:
            logging.error(
                f"Classical probabilities deviate from the statevector by "
                f"{comparison.max_deviation:.3e}")
            return EXIT_FAILED
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s: %(message)s")

    if args.benchmark:
        if not all(0 < n <= args.max_size for n in args.benchmark):
            logging.error(f"Benchmark sizes must lie in [1, {args.max_size}]: {args.benchmark}")
            print(reject_response().message)
            return EXIT_REJECTED
        try:
            df = run_benchmark(args.benchmark, max_size=args.max_size)
        except AmplitudeError as e:
            logging.error(f"Benchmark aborted: {e}")
            return EXIT_FAILED
        print(df.to_string(index=False))
        return EXIT_OK

    if args.size is None or args.target is None:
        ap.error('--size and --target are required unless --benchmark is given')

    try:
        return _run_search(args)
    except AmplitudeError as e:
        logging.error(f"Search aborted: {e}")
        return EXIT_FAILED


if __name__ == '__main__':
    raise SystemExit(main())
