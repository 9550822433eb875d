from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt

from perceptron import DEFAULT_POINTS


@dataclass
class Dataset2D:
    X: np.ndarray
    y: np.ndarray
    name: str = "dataset"

    @property
    def points(self) -> Tuple[Tuple[float, float], ...]:
        return tuple((float(a), float(b)) for a, b in self.X)

    @property
    def labels(self) -> Tuple[int, ...]:
        return tuple(int(v) for v in self.y)


def positional_labels(n: int) -> np.ndarray:
    """-1 for the first n // 2 points, +1 for the rest."""
    y = np.ones(n, dtype=int)
    y[: n // 2] = -1
    return y


def _validate_xy(X: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=int).ravel()

    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError(f"X must be shape (n, 2). Got {X.shape}")
    if X.shape[0] == 0:
        raise ValueError("X must contain at least one point")
    if y.ndim != 1 or y.shape[0] != X.shape[0]:
        raise ValueError(f"y must be shape (n,). Got {y.shape} vs X {X.shape}")

    uniq = set(np.unique(y).tolist())
    if not uniq.issubset({-1, 1}):
        raise ValueError(f"y must contain only -1 and 1. Got {sorted(uniq)}")

    return X, y


def from_points(
    points: Sequence[Tuple[float, float]],
    labels: Optional[Sequence[int]] = None,
    name: str = "points",
) -> Dataset2D:
    X = np.asarray(points, dtype=float)
    y = positional_labels(len(X)) if labels is None else np.asarray(labels)
    X, y = _validate_xy(X, y)
    return Dataset2D(X, y, name=name)


def default_points() -> Dataset2D:
    return from_points(DEFAULT_POINTS, name="default")


def plot_dataset(
    ds: Dataset2D,
    ax: Optional[plt.Axes] = None,
    title: Optional[str] = None,
    legend: bool = True,
    s: float = 30.0,
) -> plt.Axes:
    X, y = _validate_xy(ds.X, ds.y)
    if ax is None:
        _, ax = plt.subplots()

    ax.scatter(X[y == -1, 0], X[y == -1, 1], s=s, label="below")
    ax.scatter(X[y == 1, 0], X[y == 1, 1], s=s, label="above")

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title or ds.name)
    if legend:
        ax.legend()
    return ax


def plot_separation(
    ds: Dataset2D,
    weights: Sequence[float],
    threshold: float,
    ax: Optional[plt.Axes] = None,
    padding: float = 1.0,
    title: Optional[str] = None,
) -> plt.Axes:
    """
    Draws the points and the line w1 * x + w2 * y = threshold.
    """
    X, _ = _validate_xy(ds.X, ds.y)
    w1, w2 = float(weights[0]), float(weights[1])
    ax = plot_dataset(ds, ax=ax, legend=False)

    x_min, x_max = X[:, 0].min() - padding, X[:, 0].max() + padding
    y_min, y_max = X[:, 1].min() - padding, X[:, 1].max() + padding

    if w2 != 0:
        xs = np.linspace(x_min, x_max, 100)
        ax.plot(xs, (threshold - w1 * xs) / w2, "k--", label="boundary")
    elif w1 != 0:
        ax.axvline(threshold / w1, color="k", linestyle="--", label="boundary")

    ax.set_xlim(x_min, x_max)
    ax.set_ylim(y_min, y_max)
    ax.set_title(title or f"{ds.name}: w=({w1:.3f}, {w2:.3f}), P={threshold}")
    ax.legend()
    return ax
