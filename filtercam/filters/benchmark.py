# filtercam Filters - Benchmark Utilities
"""
Measure whether filters keep up with live video.

Every filter is applied to a series of random frames of the given size and
the mean time per frame is compared with the frame budget of the target
frame rate. Results are serializable dataclasses with ASCII table output.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Iterable

import numpy as np

from filtercam.buffer import PixelBuffer
from .catalog import FilterId, all_ids
from .engine import FilterEngine


@dataclass
class FilterTiming:
    """Timing result for a single filter."""
    filter_id: str
    frames: int
    total_ms: float
    avg_ms: float
    fps: float
    meets_target: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BenchmarkResult:
    """Complete benchmark result - serializable."""
    width: int
    height: int
    frames: int
    target_fps: float
    timings: list[FilterTiming] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if every filter met the target frame rate."""
        return all(t.meets_target for t in self.timings)

    @property
    def slowest(self) -> FilterTiming | None:
        if not self.timings:
            return None
        return max(self.timings, key=lambda t: t.avg_ms)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d['passed'] = self.passed
        return d

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def ascii_table(self) -> str:
        """Generate ASCII table representation."""
        lines = [
            "=" * 60,
            f"BENCHMARK: {self.width}x{self.height}, {self.frames} frames, "
            f"target {self.target_fps:g} fps",
            "=" * 60,
            f"{'Filter':<14}{'avg ms':>10}{'fps':>12}{'ok':>6}",
            "-" * 60,
        ]
        for t in self.timings:
            ok = "yes" if t.meets_target else "NO"
            lines.append(f"{t.filter_id:<14}{t.avg_ms:>10.2f}{t.fps:>12.1f}{ok:>6}")
        lines.append("-" * 60)
        lines.append(f"Result: {'PASSED' if self.passed else 'FAILED'}")
        return "\n".join(lines)


def benchmark_filters(
    width: int = 640,
    height: int = 480,
    frames: int = 10,
    filter_ids: Iterable[FilterId | str] | None = None,
    target_fps: float = 30.0,
    engine: FilterEngine | None = None,
    seed: int = 0,
) -> BenchmarkResult:
    """Time each filter on random frames.

    :param width: Frame width
    :param height: Frame height
    :param frames: Frames per filter
    :param filter_ids: Filters to measure, all of them if omitted
    :param target_fps: Frame rate a filter must sustain to pass
    :param engine: Engine to use, a default one if omitted
    :param seed: Random seed for the test frames
    :return: Timings per filter
    """
    engine = engine if engine is not None else FilterEngine()
    ids = list(filter_ids) if filter_ids is not None else all_ids()
    rng = np.random.default_rng(seed)
    source = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    budget_ms = 1000.0 / target_fps

    result = BenchmarkResult(width=width, height=height, frames=frames, target_fps=target_fps)
    for filter_id in ids:
        total = 0.0
        for _ in range(frames):
            buffer = PixelBuffer.from_array(source.copy())
            start = time.perf_counter()
            engine.apply(buffer, filter_id)
            total += time.perf_counter() - start
        total_ms = total * 1000.0
        avg_ms = total_ms / frames if frames else 0.0
        result.timings.append(FilterTiming(
            filter_id=str(filter_id),
            frames=frames,
            total_ms=total_ms,
            avg_ms=avg_ms,
            fps=1000.0 / avg_ms if avg_ms > 0 else float('inf'),
            meets_target=avg_ms <= budget_ms,
        ))
    return result
