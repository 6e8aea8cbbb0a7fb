"""Environment probes for option lists.

This module is a STABLE BOUNDARY — the only place that inspects the host.
"""

import os


def cpu_count() -> int:
    """Return the number of usable CPU cores (at least 1)."""
    # [LAW:dataflow-not-control-flow] Affinity mask first, then raw count, then 1.
    try:
        return max(1, len(os.sched_getaffinity(0)))
    except (AttributeError, OSError):
        return max(1, os.cpu_count() or 1)
