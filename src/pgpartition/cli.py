"""Command-line interface: ``pgpartition <command> ...``."""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

import torch

from pgpartition.config import PartitionConfig
from pgpartition.errors import InvalidPartitionCount
from pgpartition.partition.batch import partition_indices
from pgpartition.partition.diagnostics import load_summary
from pgpartition.partition.indexer import hash_extended, partition_index
from pgpartition.utils.logger import get_logger
from pgpartition.utils.timing import Timer

logger = get_logger("pgpartition.cli")


def _int(text: str) -> int:
    """Parse decimal or 0x-prefixed integers."""
    return int(text, 0)


def _int_list(text: str) -> list:
    """Parse a comma-separated list of integers, e.g. ``4,2``."""
    try:
        return [int(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}") from None


def _resolve(args: argparse.Namespace) -> PartitionConfig:
    """Merge --config file values with explicit command-line flags."""
    data = {}
    if args.config is not None:
        data = asdict(PartitionConfig.load(args.config))
    for key in ("key_type", "seed", "magic", "levels"):
        value = getattr(args, key, None)
        if value is not None:
            data[key] = value
    return PartitionConfig(**data)


def cmd_hash(args: argparse.Namespace, cfg: PartitionConfig) -> None:
    for value in args.values:
        print(f"{value}\t{hash_extended(value, cfg.key_type, cfg.seed)}")


def cmd_index(args: argparse.Namespace, cfg: PartitionConfig) -> None:
    for value in args.values:
        idx = partition_index(value, args.partitions, cfg.key_type, cfg.seed, cfg.magic)
        print(f"{value}\t{idx}")


def cmd_route(args: argparse.Namespace, cfg: PartitionConfig) -> None:
    if args.levels is None and args.config is None:
        raise ValueError("route needs --levels or a --config file with levels")
    scheme = cfg.scheme()
    if scheme.leaf_count == 1:
        logger.warning("Scheme %s has a single partition; every key routes to 0", scheme.levels)
    for value in args.values:
        path = scheme.route(value)
        print(f"{value}\t{'/'.join(str(i) for i in path)}\t{scheme.leaf_ordinal(path)}")


def cmd_stats(args: argparse.Namespace, cfg: PartitionConfig) -> None:
    if args.count < 0:
        raise ValueError(f"--count must be non-negative, got {args.count}")
    if args.start < -(2**63) or args.start + args.count > 2**63:
        raise ValueError(
            f"key range [{args.start}, {args.start + args.count}) exceeds the int64 range"
        )
    keys = torch.arange(args.count, dtype=torch.int64) + args.start
    indices = partition_indices(keys, args.partitions, cfg.key_type, cfg.seed, cfg.magic)
    summary = load_summary(indices, args.partitions)
    print(json.dumps(summary, indent=2))


def cmd_bench(args: argparse.Namespace, cfg: PartitionConfig) -> None:
    keys = torch.randint(-(2**62), 2**62, (args.count,), dtype=torch.int64)
    key_list = keys.tolist()
    n = args.partitions

    with Timer("scalar", items=len(key_list)) as scalar:
        for _ in range(args.iterations):
            for k in key_list:
                partition_index(k, n, cfg.key_type, cfg.seed, cfg.magic)

    with Timer("batch", items=len(key_list)) as batch:
        for _ in range(args.iterations):
            partition_indices(keys, n, cfg.key_type, cfg.seed, cfg.magic)

    scalar.items *= args.iterations
    batch.items *= args.iterations
    print(json.dumps([scalar.as_dict(), batch.as_dict()], indent=2))


COMMANDS = {
    "hash": cmd_hash,
    "index": cmd_index,
    "route": cmd_route,
    "stats": cmd_stats,
    "bench": cmd_bench,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgpartition",
        description="Compute PostgreSQL hash-partition indexes for integer keys",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML partitioning config")
    parser.add_argument(
        "--key-type", dest="key_type", default=None,
        help="Key column type: bigint, integer, smallint (default: bigint)",
    )
    parser.add_argument("--seed", type=_int, default=None, help="64-bit hash seed")
    parser.add_argument("--magic", type=_int, default=None, help="64-bit constant added before modulo")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("hash", help="Print raw extended hashes")
    p.add_argument("values", type=_int, nargs="+")

    p = sub.add_parser("index", help="Print partition indexes")
    p.add_argument("values", type=_int, nargs="+")
    p.add_argument("-n", "--partitions", type=int, required=True, help="Number of partitions")

    p = sub.add_parser("route", help="Print per-level index paths of a multi-level scheme")
    p.add_argument("values", type=_int, nargs="+")
    p.add_argument(
        "--levels", type=_int_list, default=None,
        help="Comma-separated partition counts, outermost first (e.g. 4,2)",
    )

    p = sub.add_parser("stats", help="Load summary of a consecutive key range")
    p.add_argument("--start", type=_int, default=0)
    p.add_argument("--count", type=int, required=True)
    p.add_argument("-n", "--partitions", type=int, required=True)

    p = sub.add_parser("bench", help="Time scalar and batch index computation")
    p.add_argument("--count", type=int, default=10000)
    p.add_argument("--iterations", type=int, default=3)
    p.add_argument("-n", "--partitions", type=int, default=16)

    return parser


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = _resolve(args)
        logger.debug("Running %s with key_type=%s", args.command, cfg.key_type.value)
        COMMANDS[args.command](args, cfg)
    except (InvalidPartitionCount, FileNotFoundError, ValueError) as exc:
        parser.exit(2, f"{parser.prog}: error: {exc}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
