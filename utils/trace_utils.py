# utils/trace_utils.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Random causal trace generation

import csv
import random
from typing import List, Optional, Tuple

from utils.logger import get_logger
from utils.trace_reader import NODES_DIRECTIVE


def generate_trace_file(
        filename: str,
        num_events: int,
        nodes: List[str],
        seed: Optional[int] = None,
        receive_ratio: float = 0.3,
) -> int:
    """
    Generates a CSV trace file of random local, send and receive events.

    Every receive row consumes one earlier, not yet delivered send from a
    different node, so the trace always replays cleanly. Messages may be
    delivered out of send order, which is what produces conflicts.

    Args:
        filename: The name of the output CSV file.
        num_events: Total number of rows to generate.
        nodes: Node ids of the system (e.g., ["a", "b", "c"]).
        seed: Optional seed for reproducible traces.
        receive_ratio: Probability of delivering a pending message at each step.

    Returns:
        Number of receive rows written.
    """
    if not nodes:
        raise ValueError("nodes list cannot be empty.")
    if not 0.0 <= receive_ratio <= 1.0:
        raise ValueError("receive_ratio must be between 0 and 1.")

    rng = random.Random(seed)
    rows: List[List[str]] = []
    pending: List[Tuple[str, str]] = []  # (send eid, sender node)
    receives = 0

    for i in range(1, num_events + 1):
        eid = f"e{i}"
        if pending and len(nodes) > 1 and rng.random() < receive_ratio:
            send_eid, sender = pending.pop(rng.randrange(len(pending)))
            receiver = rng.choice([n for n in nodes if n != sender])
            rows.append([eid, receiver, "receive", send_eid])
            receives += 1
            continue

        node = rng.choice(nodes)
        if rng.random() < 0.5:
            rows.append([eid, node, "local", ""])
        else:
            rows.append([eid, node, "send", ""])
            pending.append((eid, node))

    with open(filename, "w", newline="", encoding="utf-8") as f:
        f.write(f"{NODES_DIRECTIVE} {'|'.join(nodes)}\n")
        writer = csv.writer(f)
        writer.writerow(["eid", "node", "type", "source"])
        writer.writerows(rows)

    get_logger().debug(f"Generated trace {filename}: {num_events} events, {receives} receives")
    return receives
