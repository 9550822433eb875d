import numpy as np
import matplotlib.pyplot as plt
import pytest

from dataset_2d import (
    Dataset2D,
    default_points,
    from_points,
    plot_dataset,
    plot_separation,
    positional_labels,
)
from perceptron import DEFAULT_POINTS, Outcome, TrainConfig, train


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_positional_labels_split_at_floor_half():
    assert positional_labels(4).tolist() == [-1, -1, 1, 1]
    assert positional_labels(5).tolist() == [-1, -1, 1, 1, 1]
    assert positional_labels(1).tolist() == [1]


def test_default_points():
    ds = default_points()
    assert ds.points == DEFAULT_POINTS
    assert ds.labels == (-1, -1, 1, 1)
    assert ds.name == "default"


def test_from_points_rejects_bad_shapes():
    with pytest.raises(ValueError, match="shape"):
        from_points([(1.0, 2.0, 3.0)])
    with pytest.raises(ValueError, match="only -1 and 1"):
        from_points([(1.0, 2.0), (2.0, 1.0)], labels=[0, 1])
    with pytest.raises(ValueError, match="at least one point"):
        from_points(np.empty((0, 2)))


def test_plot_dataset_draws_both_classes():
    ax = plot_dataset(default_points())
    assert len(ax.collections) == 2
    assert ax.get_title() == "default"


def test_plot_separation_draws_boundary_line():
    ax = plot_separation(default_points(), (1.2, 0.5), 4.0)
    assert len(ax.lines) == 1

    xs, ys = ax.lines[0].get_data()
    assert np.allclose(1.2 * xs + 0.5 * ys, 4.0)


def test_plot_separation_vertical_boundary():
    ax = plot_separation(default_points(), (2.0, 0.0), 4.0)
    xs, _ = ax.lines[0].get_data()
    assert np.allclose(xs, 2.0)


def test_plot_separation_without_weights_draws_points_only():
    ds = Dataset2D(np.array(DEFAULT_POINTS), positional_labels(4))
    ax = plot_separation(ds, (0.0, 0.0), 4.0)
    assert len(ax.lines) == 0


def test_train_on_labelled_points_and_plot_boundary():
    ds = from_points([(1.0, 0.0), (0.0, 1.0)], labels=[1, -1], name="flipped")
    config = TrainConfig(
        points=ds.points, threshold=-1.0, speed=2.0, iteration_cap=10, labels=ds.labels
    )
    result = train(config, clock=lambda: 0)

    assert result.outcome is Outcome.SEPARATED
    assert result.weights == pytest.approx((0.0, -2.0))

    ax = plot_separation(ds, result.weights, config.threshold)
    xs, ys = ax.lines[0].get_data()
    assert np.allclose(0.0 * xs - 2.0 * ys, -1.0)


def test_default_points_feed_the_trainer():
    ds = default_points()
    config = TrainConfig(points=ds.points, labels=ds.labels)
    assert config.points == DEFAULT_POINTS
    assert config.labels == (-1, -1, 1, 1)
