#!/usr/bin/env python3
"""Benchmark suite for the PyRectDB skip list and rectangle database."""

import argparse
import io
import json
import random
import time
from collections import Counter
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pyrectdb import Database, Rectangle, SkipList


class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.search_latencies: List[float] = []
        self.remove_latencies: List[float] = []
        self.region_latencies: List[float] = []
        self.node_heights: List[int] = []

    @staticmethod
    def _percentiles(samples: List[float]) -> Dict:
        return {
            "p50": float(np.percentile(samples, 50)),
            "p95": float(np.percentile(samples, 95)),
            "p99": float(np.percentile(samples, 99)),
        }

    def to_dict(self) -> Dict:
        return {
            "insert_latencies": self._percentiles(self.insert_latencies),
            "search_latencies": self._percentiles(self.search_latencies),
            "remove_latencies": self._percentiles(self.remove_latencies),
            "region_latencies": self._percentiles(self.region_latencies),
            "mean_node_height": float(np.mean(self.node_heights)),
            "height_histogram": dict(sorted(Counter(self.node_heights).items())),
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for name, samples in (
            ("Insert", self.insert_latencies),
            ("Search", self.search_latencies),
            ("Remove", self.remove_latencies),
        ):
            fig.add_trace(go.Box(y=samples, name=f"{name} Latency", boxpoints="outliers"))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (ms)",
            boxmode="group"
        )

        fig.write_html(output_path)

    def plot_heights(self, title: str, output_path: Path):
        fig = go.Figure(go.Histogram(x=self.node_heights, name="Node height"))
        fig.update_layout(title=title, xaxis_title="Levels", yaxis_title="Nodes")
        fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, num_regions: int, seed: int):
        self.num_entries = num_entries
        self.num_regions = num_regions
        self.metrics = Metrics()
        self._rng = random.Random(seed)
        self._keys = [f"rect_{self._rng.randrange(num_entries):08d}" for _ in range(num_entries)]
        self._rects = [
            Rectangle(self._rng.randrange(1024), self._rng.randrange(1024),
                      self._rng.randrange(1, 64), self._rng.randrange(1, 64))
            for _ in range(num_entries)
        ]

    def run_skiplist_benchmark(self):
        sl = SkipList[str, Rectangle](rng=random.Random(self._rng.random()))

        for i in tqdm(range(self.num_entries), desc="SkipList Insert"):
            start = time.perf_counter()
            sl.insert(self._keys[i], self._rects[i])
            self.metrics.insert_latencies.append((time.perf_counter() - start) * 1000)

        self.metrics.node_heights = self._heights(sl)

        for i in tqdm(range(self.num_entries), desc="SkipList Search"):
            start = time.perf_counter()
            sl.search(self._keys[i])
            self.metrics.search_latencies.append((time.perf_counter() - start) * 1000)

        for i in tqdm(range(self.num_entries), desc="SkipList Remove"):
            start = time.perf_counter()
            sl.remove(self._keys[i])
            self.metrics.remove_latencies.append((time.perf_counter() - start) * 1000)

    def run_region_benchmark(self):
        db = Database(io.StringIO(), rng=random.Random(self._rng.random()))
        for key, rect in zip(self._keys, self._rects):
            db.insert(key, rect)

        for _ in tqdm(range(self.num_regions), desc="Region Search"):
            x, y = self._rng.randrange(1024), self._rng.randrange(1024)
            start = time.perf_counter()
            db.region_search(x, y, 128, 128)
            self.metrics.region_latencies.append((time.perf_counter() - start) * 1000)

    @staticmethod
    def _heights(sl: SkipList) -> List[int]:
        out = io.StringIO()
        sl.dump(out)
        # skip the title and header-node lines, drop the trailing size line
        rows = out.getvalue().splitlines()[2:-1]
        return [int(row.split(",", 1)[0].rsplit(" ", 1)[1]) for row in rows]


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of rectangles")
    parser.add_argument("--regions", type=int, default=200, help="Number of region queries")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.regions, args.seed)
    suite.run_skiplist_benchmark()
    suite.run_region_benchmark()

    suite.metrics.plot_latencies(
        "SkipList Latency Distribution",
        args.output / "skiplist_latencies.html"
    )
    suite.metrics.plot_heights(
        "SkipList Node Heights",
        args.output / "skiplist_heights.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump(suite.metrics.to_dict(), f, indent=2)


if __name__ == "__main__":
    main()
