"""
Similarity Metrics CLI
======================

Thin command-line wrapper: load inputs, call the core, report/write results.

Usage:
    python -m similarity_metrics pairwise fps.txt --measure tanimoto
    python -m similarity_metrics pairwise words.txt --measure jaro_winkler --n-jobs 4
    python -m similarity_metrics cluster fps.txt --k 1000 --tolerance 3.0 --min-pts 5
    python -m similarity_metrics cluster fps.txt --config similarity.yaml --output clusters.parquet
"""

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

import numpy as np
import polars as pl

from similarity_metrics.core.cluster import cluster_indices
from similarity_metrics.core.registry import is_string_measure, list_measures
from similarity_metrics.io.loader import load_fingerprints, load_plain
from similarity_metrics.io.manifest import load_config
from similarity_metrics.parallel.pairwise_runner import pairwise_frame

logger = logging.getLogger(__name__)


def _configure_logging(quiet: bool, verbose: bool) -> None:
    level = logging.WARNING if quiet else logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def run_pairwise(args: argparse.Namespace) -> pl.DataFrame:
    """All distinct pairs of the input file under one measure."""
    settings = load_config(args.config)['pairwise']
    measure = args.measure or settings['measure']
    n_jobs = args.n_jobs if args.n_jobs is not None else settings['n_jobs']

    if is_string_measure(measure):
        items = load_plain(args.input)
    else:
        items = list(load_fingerprints(args.input))

    logger.info(f"{measure}: {len(items):,} items, n_jobs={n_jobs}")
    t0 = time.time()
    df = pairwise_frame(items, measure, n_jobs=n_jobs, batch_size=settings['batch_size'])
    logger.info(f"{len(df):,} pairs in {time.time() - t0:.2f}s")

    if len(df):
        values = df['value'].to_numpy()
        n_nan = int(np.isnan(values).sum())
        if n_nan:
            logger.warning(f"{n_nan:,} pairs undefined (NaN)")
        if n_nan < len(values):
            logger.info(f"mean={np.nanmean(values):.6f} min={np.nanmin(values):.6f} max={np.nanmax(values):.6f}")

    if args.output:
        df.write_parquet(args.output)
        logger.info(f"Wrote {args.output}")
    return df


def run_cluster(args: argparse.Namespace) -> List[np.ndarray]:
    """Bubble + density clustering of a fingerprint file."""
    settings = load_config(args.config)['cluster']
    for key in ('k', 'tolerance', 'min_pts', 'random_state'):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value

    points = load_fingerprints(args.input)
    logger.info(
        f"Clustering {len(points):,} fingerprints: k={settings['k']} "
        f"tolerance={settings['tolerance']} min_pts={settings['min_pts']}"
    )

    groups = cluster_indices(
        points,
        settings['k'],
        tolerance=settings['tolerance'],
        min_pts=settings['min_pts'],
        random_state=settings['random_state'],
        n_jobs=args.n_jobs or 1,
    )

    clustered = sum(len(g) for g in groups)
    logger.info(f"{len(groups)} clusters, {clustered:,} points assigned, {len(points) - clustered:,} noise")

    if args.output:
        if groups:
            labels = np.concatenate([np.full(len(g), c, dtype=np.int64) for c, g in enumerate(groups)])
            index = np.concatenate(groups).astype(np.int64)
        else:
            labels = index = np.empty(0, dtype=np.int64)
        pl.DataFrame({'cluster': labels, 'index': index}).write_parquet(args.output)
        logger.info(f"Wrote {args.output}")
    return groups


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fingerprint/string similarity and bubble clustering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Measures: {', '.join(list_measures())}",
    )
    parser.add_argument('-q', '--quiet', action='store_true', help='Only warnings and errors')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    pairwise = sub.add_parser('pairwise', help='Measure every distinct pair of inputs')
    pairwise.add_argument('input', type=Path, help='One fingerprint (0/1 string) or one string per line')
    pairwise.add_argument('--measure', choices=list_measures(), help='Measure name (default from config)')
    pairwise.add_argument('--config', type=Path, help='similarity.yaml')
    pairwise.add_argument('--n-jobs', type=int, help='joblib workers')
    pairwise.add_argument('--output', type=Path, help='Write pairs to this parquet file')
    pairwise.set_defaults(func=run_pairwise)

    clus = sub.add_parser('cluster', help='Bubble + density clustering of fingerprints')
    clus.add_argument('input', type=Path, help='One fingerprint (0/1 string) per line')
    clus.add_argument('--config', type=Path, help='similarity.yaml')
    clus.add_argument('--k', type=int, help='Number of bubbles')
    clus.add_argument('--tolerance', type=float, help='Neighbourhood radius')
    clus.add_argument('--min-pts', dest='min_pts', type=int, help='Minimum points per neighbourhood')
    clus.add_argument('--seed', dest='random_state', type=int, help='Seed for bubble sampling')
    clus.add_argument('--n-jobs', type=int, help='joblib workers for seed assignment')
    clus.add_argument('--output', type=Path, help='Write (cluster, index) rows to this parquet file')
    clus.set_defaults(func=run_cluster)

    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.quiet, args.verbose)
    return args.func(args)


if __name__ == '__main__':
    main()
