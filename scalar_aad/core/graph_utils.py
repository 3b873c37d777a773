"""
Graph traversal and inspection helpers.

All walks are iterative (explicit stack), so graph depth is bounded by memory,
not by the interpreter's recursion limit. Nodes are identified by tape index.
"""

from collections import Counter
from typing import Dict, List, Optional

import numpy as np

from .tape import Tape


def topological_order(tape: Tape, root: int) -> List[int]:
    """
    Depth-first post-order of every node reachable from `root`.

    Operands are emitted before the node that consumes them, each node exactly
    once however many paths reach it; `root` is always last. Reverse the result
    for a root-first sweep.
    """
    nodes = tape.nodes
    order: List[int] = []
    visited = set()
    stack = [(root, False)]
    while stack:
        idx, expanded = stack.pop()
        if expanded:
            order.append(idx)
            continue
        if idx in visited:
            continue
        visited.add(idx)
        stack.append((idx, True))
        # reversed so the first operand is explored first
        for p in reversed(nodes[idx].parents):
            if p not in visited:
                stack.append((p, False))
    return order


def reachable(tape: Tape, root: int) -> List[int]:
    """Every node reachable from `root` (root included), once each, in discovery order."""
    nodes = tape.nodes
    seen = {root}
    out = []
    stack = [root]
    while stack:
        idx = stack.pop()
        out.append(idx)
        for p in nodes[idx].parents:
            if p not in seen:
                seen.add(p)
                stack.append(p)
    return out


def _select(tape: Tape, root: Optional[int]) -> List[int]:
    if root is None:
        return list(range(len(tape.nodes)))
    return sorted(reachable(tape, root))


def get_graph_stats(tape: Tape, root: Optional[int] = None) -> Dict:
    """
    Node/edge counts, fan-in/fan-out and op breakdown, for the whole tape or
    for the subgraph reachable from `root`.
    """
    indices = _select(tape, root)
    if not indices:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    nodes = tape.nodes
    fan_ins = [len(nodes[i].parents) for i in indices]

    # fan-out counts only consumers inside the selection
    fan_out = dict.fromkeys(indices, 0)
    for i in indices:
        for p in nodes[i].parents:
            fan_out[p] += 1
    fan_outs = list(fan_out.values())

    op_counter = Counter(nodes[i].op_tag for i in indices)

    return {
        'nodes': len(indices),
        'edges': int(sum(fan_ins)),
        'leaves': op_counter.get('leaf', 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def analyze_graph(tape: Tape, root: Optional[int] = None) -> str:
    """Short text report built from get_graph_stats."""
    stats = get_graph_stats(tape, root)

    if stats['nodes'] == 0:
        return "Empty computation graph"

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total nodes: {stats['nodes']:,}")
    report.append(f"  Total edges: {stats['edges']:,}")
    report.append(f"  Leaves: {stats['leaves']:,}")
    report.append(f"  Max fan-in / fan-out: {stats['max_fan_in']} / {stats['max_fan_out']}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    top_ops = sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True)[:3]
    report.append("  Top operations:")
    for op, count in top_ops:
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)


def format_graph(tape: Tape, root: Optional[int] = None, max_nodes: int = 20) -> str:
    """
    One line per node in tape order:
        Node    3: mul          (  -6.000000) <- [Node0, Node1]
    """
    indices = _select(tape, root)
    if not indices:
        return "Empty graph"

    lines = []
    for i in indices[:max_nodes]:
        node = tape.nodes[i]
        if node.parents:
            parent_info = ", ".join(f"Node{p}" for p in node.parents)
            lines.append(f"Node {i:4d}: {node.op_tag:12s} ({float(node.data):10.6f}) <- [{parent_info}]")
        else:
            lines.append(f"Node {i:4d}: {node.op_tag:12s} ({float(node.data):10.6f}) [leaf/input]")

    if len(indices) > max_nodes:
        lines.append(f"... ({len(indices) - max_nodes} more nodes)")

    return "\n".join(lines)
