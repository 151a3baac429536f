"""Benchmark: scalar vs batch partition index throughput."""

import argparse
import json
from pathlib import Path

import torch

from pgpartition import get_logger, partition_index, partition_indices, seed_everything
from pgpartition.utils import Timer


def benchmark_partitioning(N_values, num_partitions, key_type="int8", device="cpu"):
    """Time scalar and tensor partition assignment for each key count."""
    results = []

    for N in N_values:
        logger.info(f"Benchmarking N={N}")

        keys = torch.randint(-(2**62), 2**62, (N,), dtype=torch.int64, device=device)
        key_list = keys.tolist()

        with Timer("scalar", items=N) as scalar:
            expected = [partition_index(k, num_partitions, key_type) for k in key_list]

        with Timer("batch", items=N, device=device) as batch:
            got = partition_indices(keys, num_partitions, key_type)

        if got.cpu().tolist() != expected:
            raise RuntimeError(f"batch and scalar paths disagree for N={N}")

        results.append({
            "N": N,
            "num_partitions": num_partitions,
            "key_type": key_type,
            "scalar": scalar.as_dict(),
            "batch": batch.as_dict(),
            "speedup": scalar.elapsed / batch.elapsed if batch.elapsed > 0 else None,
        })

    return results


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Partition index benchmark")
    parser.add_argument("--out", type=Path, default=Path("results/benchmarks/partition.json"))
    parser.add_argument("--device", type=str, default="cpu", choices=["cpu", "cuda"])
    parser.add_argument("--N", type=int, nargs="+", default=[1000, 10000, 100000])
    parser.add_argument("--partitions", type=int, default=64)
    parser.add_argument("--key-type", dest="key_type", default="bigint")

    args = parser.parse_args()

    logger = get_logger("partition_bench")
    seed_everything(42)

    results = benchmark_partitioning(
        N_values=args.N,
        num_partitions=args.partitions,
        key_type=args.key_type,
        device=args.device,
    )

    args.out.parent.mkdir(parents=True, exist_ok=True)
    with open(args.out, "w") as f:
        json.dump(results, f, indent=2)

    print(f"Results saved to {args.out}")
