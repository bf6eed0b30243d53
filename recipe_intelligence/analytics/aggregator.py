from __future__ import annotations

from collections import Counter
from typing import Any

import numpy as np


def _latest(events: list[dict[str, Any]], key: str) -> float | None:
    for event in reversed(events):
        if event.get(key) is not None:
            return event[key]
    return None


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    total = len(events)

    # Event counts
    type_counter: Counter[str] = Counter(e["type"] for e in events)

    # Processing time
    times = np.array(
        [e["processing_time_ms"] for e in events if "processing_time_ms" in e],
        dtype=float,
    )
    avg_time = round(float(times.mean()), 1) if times.size else 0.0
    p95_time = round(float(np.percentile(times, 95)), 1) if times.size else 0.0

    # Model quality
    train_events = [e for e in events if e["type"] == "train"]
    silhouette = _latest(train_events, "silhouette")
    r2 = _latest(train_events, "r_squared")

    # Plan fitness
    fitness = [e["best_fitness"] for e in events if e["type"] == "plan" and "best_fitness" in e]
    avg_fitness = round(sum(fitness) / len(fitness), 2) if fitness else 0.0

    # Recommendation list sizes
    rec_events = [e for e in events if e["type"] == "recommend"]
    empty_collaborative = sum(1 for e in rec_events if e.get("collaborative", 0) == 0)

    return {
        "total_events": total,
        "event_counts": dict(type_counter),
        "avg_processing_time_ms": avg_time,
        "p95_processing_time_ms": p95_time,
        "latest_silhouette": silhouette,
        "latest_r_squared": r2,
        "avg_plan_fitness": avg_fitness,
        "recommendation_stats": {
            "requests": len(rec_events),
            "empty_collaborative": empty_collaborative,
            "empty_collaborative_rate": (
                round(empty_collaborative / len(rec_events) * 100, 1) if rec_events else 0.0
            ),
        },
    }
