import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

import numpy as np


SPEEDS = (0.001, 0.01, 0.05, 0.1, 0.2, 0.3)
ITERATION_CAPS = (100, 200, 500, 1000)
DEADLINES_MS = (500, 1000, 2000, 5000)

DEFAULT_THRESHOLD = 4.0
DEFAULT_POINTS = ((0.0, 6.0), (1.0, 5.0), (3.0, 3.0), (2.0, 4.0))


def _check_labels(labels: Sequence[float], n: int) -> Tuple[int, ...]:
    if len(labels) != n:
        raise ValueError(
            f"labels must match points. Got {len(labels)} labels for {n} points"
        )
    bad = sorted({float(v) for v in labels if v not in (-1, 1)})
    if bad:
        raise ValueError(f"labels must contain only -1 and 1. Got {bad}")
    return tuple(int(v) for v in labels)


def signal(point: Sequence[float], weights: np.ndarray) -> float:
    return float(np.dot(point, weights))


def update_weights(
    weights: np.ndarray, point: Sequence[float], speed: float, delta: float
) -> np.ndarray:
    return weights + delta * np.asarray(point, dtype=float) * speed


def validate(
    points: Sequence[Sequence[float]],
    weights: np.ndarray,
    threshold: float,
    labels: Optional[Sequence[int]] = None,
) -> bool:
    """
    True iff every point sits strictly on its side of the threshold.

    Without labels the first n // 2 points must score below the threshold and
    the rest above it.
    """
    X = np.asarray(points, dtype=float)
    scores = X @ weights

    if labels is None:
        middle = len(X) // 2
        below = scores[:middle] < threshold
        above = scores[middle:] > threshold
        return bool(below.all() and above.all())

    labels = np.asarray(_check_labels(labels, len(X)))
    ok = np.where(labels < 0, scores < threshold, scores > threshold)
    return bool(ok.all())


class Outcome(Enum):
    SEPARATED = "separated"
    EXHAUSTED = "exhausted"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class TrainConfig:
    points: Tuple[Tuple[float, float], ...] = DEFAULT_POINTS
    threshold: float = DEFAULT_THRESHOLD
    speed: float = SPEEDS[0]
    iteration_cap: int = ITERATION_CAPS[0]
    deadline_ms: int = DEADLINES_MS[0]
    labels: Optional[Tuple[int, ...]] = None

    def __post_init__(self):
        points = tuple(tuple(float(c) for c in p) for p in self.points)
        if not points:
            raise ValueError("points must not be empty")
        for p in points:
            if len(p) != 2:
                raise ValueError(f"points must be (x, y) pairs. Got {p}")
        object.__setattr__(self, "points", points)

        if self.iteration_cap < 0:
            raise ValueError(
                f"iteration_cap must be >= 0. Got {self.iteration_cap}"
            )
        if self.deadline_ms < 0:
            raise ValueError(f"deadline_ms must be >= 0. Got {self.deadline_ms}")

        if self.labels is not None:
            labels = _check_labels(tuple(self.labels), len(points))
            object.__setattr__(self, "labels", labels)

    @classmethod
    def default(cls) -> "TrainConfig":
        return cls()


@dataclass(frozen=True)
class TrainResult:
    outcome: Outcome
    weights: Tuple[float, float]
    steps: int
    epochs: int
    elapsed_ms: float

    @property
    def w1(self) -> float:
        return self.weights[0]

    @property
    def w2(self) -> float:
        return self.weights[1]

    @property
    def verdict(self) -> Optional[bool]:
        """True if separated, False if the iteration cap ran out, None on timeout."""
        if self.outcome is Outcome.SEPARATED:
            return True
        if self.outcome is Outcome.EXHAUSTED:
            return False
        return None


def train(
    config: TrainConfig, clock: Callable[[], int] = time.perf_counter_ns
) -> TrainResult:
    """
    Online perceptron updates over config.points until they are separated,
    the iteration cap runs out, or the deadline passes.

    clock must return nanoseconds. The deadline is checked once per point,
    before that point's update.
    """
    X = np.asarray(config.points, dtype=float)
    w = np.zeros(2)
    deadline_ns = config.deadline_ms * 1_000_000
    steps = 0

    start = clock()

    def finish(outcome, epochs):
        elapsed_ms = (clock() - start) / 1_000_000
        return TrainResult(
            outcome=outcome,
            weights=(float(w[0]), float(w[1])),
            steps=steps,
            epochs=epochs,
            elapsed_ms=elapsed_ms,
        )

    # large speeds make the weights diverge to inf and then nan; such runs
    # just never validate and end up exhausted
    with np.errstate(over="ignore", invalid="ignore"):
        for epoch in range(config.iteration_cap):
            for point in X:
                if clock() - start > deadline_ns:
                    return finish(Outcome.TIMED_OUT, epoch)

                y = signal(point, w)
                delta = config.threshold - y
                w = update_weights(w, point, config.speed, delta)
                steps += 1

                if validate(X, w, config.threshold, config.labels):
                    return finish(Outcome.SEPARATED, epoch)

    return finish(Outcome.EXHAUSTED, config.iteration_cap)


def compute(
    points: Sequence[Tuple[float, float]],
    threshold: float,
    speed: float,
    iteration_cap: int,
    deadline_ms: int,
    labels: Optional[Sequence[int]] = None,
    clock: Callable[[], int] = time.perf_counter_ns,
) -> TrainResult:
    config = TrainConfig(
        points=tuple(points),
        threshold=threshold,
        speed=speed,
        iteration_cap=iteration_cap,
        deadline_ms=deadline_ms,
        labels=None if labels is None else tuple(labels),
    )
    return train(config, clock=clock)


def describe(result: TrainResult) -> str:
    if result.outcome is Outcome.SEPARATED:
        return "Correct"
    if result.outcome is Outcome.TIMED_OUT:
        return "Can't do the calculations in a proper time (deadline hit)"
    return "Can't do the calculations in a proper iterations number"


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Train a 2-D perceptron on the default points within a deadline."
    )
    parser.add_argument("--speed", type=float, choices=SPEEDS, default=SPEEDS[0])
    parser.add_argument(
        "--iterations", type=int, choices=ITERATION_CAPS, default=ITERATION_CAPS[0]
    )
    parser.add_argument(
        "--deadline", type=int, choices=DEADLINES_MS, default=DEADLINES_MS[0]
    )
    parser.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD)
    parser.add_argument("--plot", action="store_true")
    args = parser.parse_args()

    from dataset_2d import default_points, plot_separation

    ds = default_points()
    config = TrainConfig(
        points=ds.points,
        labels=ds.labels,
        threshold=args.threshold,
        speed=args.speed,
        iteration_cap=args.iterations,
        deadline_ms=args.deadline,
    )

    print("Training...")
    result = train(config)

    print(f"P: {config.threshold}")
    print(f"W1: {result.w1}")
    print(f"W2: {result.w2}")
    print(f"Result: {describe(result)}")
    print(f"{result.steps} steps, {result.elapsed_ms:.2f} ms")

    if args.plot:
        import matplotlib.pyplot as plt

        plot_separation(ds, result.weights, config.threshold)
        plt.show()
