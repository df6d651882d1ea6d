"""
Graph utilities: statistics and summaries of the nodes recorded on a tape.
"""

import logging
from collections import Counter
from typing import Dict

import numpy as np

logger = logging.getLogger(__name__)


def get_graph_stats(tape) -> Dict:
    """
    Count nodes, edges, fan-in/fan-out and operation tags on `tape`.

    Fan-in of a node is its number of operands (0 or 2); fan-out is how
    many recorded nodes consume it. An operand used twice by the same node
    (x * x) counts as two edges.
    """
    if not tape.nodes:
        return {
            'nodes': 0,
            'leaves': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(tape.nodes)
    fan_ins = [len(node.children) for node in tape.nodes]
    fan_outs = [0] * n_nodes
    for node in tape.nodes:
        for child in node.children:
            fan_outs[child] += 1

    op_counter = Counter(node.op_tag for node in tape.nodes)

    return {
        'nodes': n_nodes,
        'leaves': op_counter.get('leaf', 0),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def format_graph_summary(tape) -> str:
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        return "Empty computation graph"

    lines = [
        "Computation graph summary:",
        f"  Total nodes:  {stats['nodes']:,} ({stats['leaves']:,} leaves)",
        f"  Total edges:  {stats['edges']:,}",
        f"  Max fan-out:  {stats['max_fan_out']}",
        f"  Avg fan-out:  {stats['avg_fan_out']:.2f}",
        "  Operation breakdown:",
    ]
    for op_tag, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        lines.append(f"    {op_tag:6s}: {count:6,} ({pct:5.1f}%)")
    return "\n".join(lines)


def log_graph_summary(tape, level: int = logging.INFO) -> Dict:
    """Log the summary of `tape` and return its statistics."""
    logger.log(level, "%s", format_graph_summary(tape))
    return get_graph_stats(tape)
