from __future__ import annotations

import numpy as np

from recipe_intelligence.analytics.aggregator import compute_analytics
from recipe_intelligence.analytics.store import EventLog


def test_analytics_returns_empty_initially():
    body = compute_analytics(EventLog().get_events())
    assert body["total_events"] == 0
    assert body["avg_processing_time_ms"] == 0.0
    assert body["latest_silhouette"] is None


def test_event_log_records_and_filters():
    log = EventLog()
    log.record_event("train", {"processing_time_ms": 5.0})
    log.record_event("plan", {"processing_time_ms": 9.0})

    assert len(log) == 2
    assert [e["type"] for e in log.get_events()] == ["train", "plan"]
    assert log.get_events("plan")[0]["processing_time_ms"] == 9.0
    assert "timestamp" in log.get_events()[0]

    log.clear()
    assert log.get_events() == []


def test_analytics_summarises_events():
    log = EventLog()
    log.record_event("train", {"processing_time_ms": 10.0, "silhouette": 0.2, "r_squared": 0.4})
    log.record_event("train", {"processing_time_ms": 20.0, "silhouette": 0.5, "r_squared": None})
    log.record_event("recommend", {"processing_time_ms": 3.0, "collaborative": 0})
    log.record_event("recommend", {"processing_time_ms": 4.0, "collaborative": 3})
    log.record_event("plan", {"processing_time_ms": 50.0, "best_fitness": 1000.0})
    log.record_event("plan", {"processing_time_ms": 70.0, "best_fitness": 1100.0})

    body = compute_analytics(log.get_events())

    assert body["total_events"] == 6
    assert body["event_counts"] == {"train": 2, "recommend": 2, "plan": 2}
    times = [10.0, 20.0, 3.0, 4.0, 50.0, 70.0]
    assert body["avg_processing_time_ms"] == round(float(np.mean(times)), 1)
    assert body["p95_processing_time_ms"] == round(float(np.percentile(times, 95)), 1)
    assert body["latest_silhouette"] == 0.5
    assert body["latest_r_squared"] == 0.4
    assert body["avg_plan_fitness"] == 1050.0
    assert body["recommendation_stats"]["empty_collaborative"] == 1
    assert body["recommendation_stats"]["empty_collaborative_rate"] == 50.0
