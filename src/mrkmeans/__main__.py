"""
Command line entry point.

    python -m mrkmeans points.csv -k 4 --seed 0

Reads points as described in `mrkmeans.io`, fits k-means and prints the
centers to stdout, one per line. The fit duration goes to stderr.
"""

import argparse
import sys
import time
from typing import List, Optional

from .algorithms.kmeans import KMeans, ALGORITHMS
from .io import read_points, write_centers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mrkmeans',
        description='Exact k-means clustering accelerated by an mrkd-tree.'
    )
    parser.add_argument('input', nargs='?', default=None,
                        help='CSV file of points (default: stdin)')
    parser.add_argument('-k', '--clusters', type=int, required=True,
                        help='number of clusters')
    parser.add_argument('--algorithm', choices=ALGORITHMS, default='simple',
                        help='update step (default: simple)')
    parser.add_argument('--seed', type=int, default=None,
                        help='random seed for initialization and tree construction')
    parser.add_argument('--max-iter', type=int, default=300,
                        help='maximum number of iterations (default: 300)')
    parser.add_argument('--no-header', action='store_true',
                        help='the first line already holds a point')
    parser.add_argument('--skip-columns', type=int, default=1,
                        help='leading identifier columns per row (default: 1)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='print progress (repeat for per-iteration output)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    source = args.input if args.input is not None else sys.stdin
    points = read_points(source, skip_header=not args.no_header,
                         skip_columns=args.skip_columns)

    model = KMeans(
        n_clusters=args.clusters,
        algorithm=args.algorithm,
        max_iter=args.max_iter,
        verbose=args.verbose,
        random_state=args.seed
    )

    start = time.time()
    model.fit(points)
    print(f"total: {time.time() - start:.3f}s", file=sys.stderr)

    write_centers(model.cluster_centers_, sys.stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
