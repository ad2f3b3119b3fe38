from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Callable, List

import numpy as np
from tqdm import tqdm

from detect_kit import CURRENCY_PRESET, OBJECT_PRESET, DetectionPostprocessor
from Retina_Assist import analyze_depth_frame


@dataclass(frozen=True)
class FrameTiming:
    label: str
    frames: int
    mean_ms: float
    p50_ms: float
    p95_ms: float
    worst_ms: float

    @property
    def frames_per_s(self) -> float:
        return 1000.0 / self.mean_ms if self.mean_ms > 0 else float("inf")


def _frame_timing(label: str, samples_s: List[float]) -> FrameTiming:
    if not samples_s:
        raise ValueError("No samples recorded.")
    ms = np.asarray(samples_s, dtype=np.float64) * 1000.0
    p50, p95 = np.percentile(ms, [50.0, 95.0])
    return FrameTiming(
        label=label,
        frames=int(ms.size),
        mean_ms=float(ms.mean()),
        p50_ms=float(p50),
        p95_ms=float(p95),
        worst_ms=float(ms.max()),
    )


def _report(t: FrameTiming) -> str:
    return (
        f"{t.label:<28} frames={t.frames} mean={t.mean_ms:.3f}ms p50={t.p50_ms:.3f}ms "
        f"p95={t.p95_ms:.3f}ms worst={t.worst_ms:.3f}ms (~{t.frames_per_s:.0f} fps)"
    )


def _synthetic_tensor(rng: np.random.Generator, anchors: int, classes: int, channels_last: bool) -> np.ndarray:
    """
    Pixel-space tensor with a sparse set of confident anchors, like a real frame.
    """

    grid = np.zeros((4 + classes, anchors), dtype=np.float32)
    grid[0:2, :] = rng.uniform(0, 640, size=(2, anchors))
    grid[2:4, :] = rng.uniform(8, 200, size=(2, anchors))
    grid[4:, :] = rng.uniform(0.0, 0.2, size=(classes, anchors))
    hot = rng.choice(anchors, size=max(1, anchors // 100), replace=False)
    grid[4 + rng.integers(0, classes, size=hot.size), hot] = rng.uniform(0.3, 1.0, size=hot.size)
    if channels_last:
        grid = grid.T
    return np.ascontiguousarray(grid)[None, ...]


def _time(fn: Callable[[], object], iterations: int, warmup: int, label: str) -> FrameTiming:
    for _ in range(warmup):
        fn()
    samples: List[float] = []
    for _ in tqdm(range(iterations), desc=label, unit="frame"):
        t0 = time.perf_counter()
        fn()
        samples.append(time.perf_counter() - t0)
    return _frame_timing(label, samples)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark per-frame decode + NMS and depth zone analysis on synthetic inputs."
    )
    parser.add_argument("--anchors", type=int, default=8400, help="Anchors per tensor (e.g., 8400 for 640 input).")
    parser.add_argument("--classes", type=int, default=6, help="Number of class score channels.")
    parser.add_argument("--preset", choices=("currency", "object"), default="currency", help="Post-process preset.")
    parser.add_argument("--depth-width", type=int, default=160, help="Synthetic depth image width.")
    parser.add_argument("--depth-height", type=int, default=120, help="Synthetic depth image height.")
    parser.add_argument("--iterations", type=int, default=200, help="Recorded iterations per benchmark.")
    parser.add_argument("--warmup", type=int, default=10, help="Warmup iterations to run but not record.")
    parser.add_argument("--seed", type=int, default=0, help="RNG seed for synthetic inputs.")
    args = parser.parse_args()

    if args.anchors < 1:
        raise ValueError("--anchors must be >= 1")
    if args.classes < 1:
        raise ValueError("--classes must be >= 1")
    if args.iterations < 1:
        raise ValueError("--iterations must be >= 1")
    if args.warmup < 0:
        raise ValueError("--warmup must be >= 0")
    if args.depth_width < 1 or args.depth_height < 1:
        raise ValueError("--depth-width/--depth-height must be >= 1")

    rng = np.random.default_rng(int(args.seed))
    post = DetectionPostprocessor(CURRENCY_PRESET if args.preset == "currency" else OBJECT_PRESET)

    first = _synthetic_tensor(rng, args.anchors, args.classes, channels_last=False)
    last = _synthetic_tensor(rng, args.anchors, args.classes, channels_last=True)
    depth = rng.integers(0, 8192, size=args.depth_width * args.depth_height, dtype=np.uint16)

    kept_first = len(post.process(first))
    kept_last = len(post.process(last))

    s_first = _time(lambda: post.process(first.ravel(), first.shape), args.iterations, args.warmup, "channels_first")
    s_last = _time(lambda: post.process(last.ravel(), last.shape), args.iterations, args.warmup, "channels_last")
    s_depth = _time(
        lambda: analyze_depth_frame(depth, args.depth_width, args.depth_height),
        args.iterations,
        args.warmup,
        "depth_zones",
    )

    for timing in (s_first, s_last, s_depth):
        print(_report(timing))
    print(f"detections_kept channels_first={kept_first} channels_last={kept_last} preset={args.preset}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
