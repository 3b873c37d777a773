"""
Benchmark the reverse pass on large scalar graphs.

Graphs:
1. chain   : y = x + 1 + 1 + ... (depth n), dy/dx = 1
2. diamond : y_{k+1} = y_k * c + y_k * (1 - c) with shared y_k (depth n), dy/dx = 1
3. wide    : y = sum_i w_i * x_i (n leaves), dy/dx_i = w_i

Usage:
    python bench_deep_graph.py --depth 200000 --width 50000
"""

import argparse
import time

import numpy as np

from scalar_aad import backward, get_graph_stats, use_tape, zero_grad
from scalar_aad.logger import setup_logger

logger = setup_logger("bench_deep_graph")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Reverse-pass timing on deep and wide scalar graphs',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--depth', type=int, default=100000,
                        help='Depth of the chain and diamond graphs')
    parser.add_argument('--width', type=int, default=20000,
                        help='Number of leaves in the wide graph')
    parser.add_argument('--graphs', type=str, default='chain,diamond,wide',
                        help='Comma-separated subset of graphs to run')
    parser.add_argument('--seed', type=int, default=0,
                        help='RNG seed for the wide graph weights')
    return parser.parse_args()


def build_chain(tape, depth):
    x = tape.value(0.5, name="x")
    y = x
    for _ in range(depth):
        y = y + 1.0
    return [x], y, [1.0]


def build_diamond(tape, depth):
    x = tape.value(0.5, name="x")
    c = 0.25
    y = x
    for _ in range(depth):
        y = y * c + y * (1.0 - c)
    return [x], y, [1.0]


def build_wide(tape, width, rng):
    weights = rng.normal(size=width)
    xs = [tape.value(v) for v in rng.normal(size=width)]
    y = xs[0] * weights[0]
    for x, w in zip(xs[1:], weights[1:]):
        y = y + x * w
    return xs, y, list(weights)


def run_case(name, builder):
    with use_tape() as tape:
        t0 = time.perf_counter()
        inputs, y, expected = builder(tape)
        t1 = time.perf_counter()
        backward(y)
        t2 = time.perf_counter()
        zero_grad(y)
        t3 = time.perf_counter()

        # grads are gone after zero_grad; run once more to check them
        backward(y)
        got = np.array([x.grad for x in inputs])
        max_err = float(np.max(np.abs(got - np.array(expected))))

        stats = get_graph_stats(tape, y.index)
        metrics = {
            "graph": name,
            "nodes": stats["nodes"],
            "forward_ms": (t1 - t0) * 1000,
            "backward_ms": (t2 - t1) * 1000,
            "zero_grad_ms": (t3 - t2) * 1000,
            "max_grad_err": max_err,
        }
        logger.info("%s done", name, extra={"metrics": metrics})
        return metrics


def main():
    args = parse_args()
    rng = np.random.default_rng(args.seed)
    builders = {
        "chain": lambda tape: build_chain(tape, args.depth),
        "diamond": lambda tape: build_diamond(tape, args.depth),
        "wide": lambda tape: build_wide(tape, args.width, rng),
    }

    results = []
    for name in args.graphs.split(','):
        name = name.strip()
        if name not in builders:
            logger.error("unknown graph %r (choose from %s)", name, sorted(builders))
            continue
        results.append(run_case(name, builders[name]))

    print("\n" + "=" * 70)
    print(f"{'graph':10s} {'nodes':>10s} {'fwd ms':>10s} {'bwd ms':>10s} {'zero ms':>10s} {'max err':>10s}")
    print("=" * 70)
    for r in results:
        print(f"{r['graph']:10s} {r['nodes']:10,d} {r['forward_ms']:10.1f} "
              f"{r['backward_ms']:10.1f} {r['zero_grad_ms']:10.1f} {r['max_grad_err']:10.2e}")
    print("=" * 70)


if __name__ == "__main__":
    main()
