import numpy as np
import pytest

from mvtoolbox.core.errors import DimensionMismatch
from mvtoolbox.models.base import Method
from mvtoolbox.models.transfer import PooledRidgeTransfer, PooledParams


class JointMean(Method):
    transfer = True

    def __init__(self, **options):
        super().__init__(**options)
        self.calls = 0

    def estimate(self, X, Y):
        self.calls += 1
        assert isinstance(X, list) and isinstance(Y, list)
        return float(np.mean(np.vstack(Y)))

    def map(self, X, params):
        return [x + params for x in X]


def make_tasks(n_tasks=3, d=4, seed=0, bias_step=2.0):
    rng = np.random.default_rng(seed)
    w = rng.normal(size=(d, 1))
    data, design = [], []
    for t in range(n_tasks):
        X = rng.normal(size=(20 + t, d))
        data.append(X)
        design.append(X @ w + bias_step * t)
    return data, design, w


def test_transfer_method_estimates_once_on_whole_collection():
    data = [np.zeros((2, 3)), np.zeros((4, 3))]
    design = [np.zeros((2, 1)), np.full((4, 1), 3.0)]
    m = JointMean().train(data, design)
    assert m.is_transfer()
    assert m.calls == 1
    assert m.params == pytest.approx(2.0)
    assert m.indims == [(2, 3), (4, 3)]
    out = m.test(data)
    assert [o.shape for o in out] == [(2, 3), (4, 3)]
    assert np.allclose(out[1], 2.0)


def test_transfer_restores_each_members_shape():
    data = [np.zeros((2, 2, 3)), np.zeros((3, 6))]
    design = [np.zeros((2, 1)), np.zeros((3, 1))]
    out = JointMean().train(data, design).test(data)
    assert out[0].shape == (2, 2, 3)
    assert out[1].shape == (3, 6)


def test_transfer_feature_mismatch_raises_without_committing():
    data = [np.zeros((5, 3)), np.zeros((5, 4))]
    design = [np.zeros((5, 1)), np.zeros((5, 1))]
    m = JointMean()
    with pytest.raises(DimensionMismatch):
        m.train(data, design)
    assert m.calls == 0
    assert m.params is None
    assert m.indims is None


def test_transfer_feature_mismatch_keeps_previous_fit():
    m = JointMean().train([np.zeros((2, 3))], [np.ones((2, 1))])
    with pytest.raises(DimensionMismatch):
        m.train([np.zeros((2, 3)), np.zeros((2, 4))], [np.ones((2, 1)), np.ones((2, 1))])
    assert m.params == pytest.approx(1.0)
    assert m.indims == [(2, 3)]


def test_pooled_ridge_recovers_shared_weights_and_task_intercepts():
    data, design, w = make_tasks()
    m = PooledRidgeTransfer().train(data, design)
    assert isinstance(m.params, PooledParams)
    assert np.allclose(m.params.w, w, atol=1e-6)
    assert np.allclose(m.params.b.ravel(), [0.0, 2.0, 4.0], atol=1e-6)
    preds = m.test(data)
    assert len(preds) == 3
    for y, p in zip(design, preds):
        assert p.shape == y.shape
        assert np.allclose(p, y, atol=1e-6)


def test_pooled_ridge_shared_intercept():
    data, design, _ = make_tasks(bias_step=0.0)
    m = PooledRidgeTransfer(task_intercepts=False, ridge=1e-8).train(data, design)
    assert m.params.b.shape == (3, 1)
    assert np.allclose(m.params.b, m.params.b[0])


def test_pooled_ridge_rejects_mismatched_features():
    data, design, _ = make_tasks()
    data[1] = data[1][:, :3]
    with pytest.raises(DimensionMismatch):
        PooledRidgeTransfer().train(data, design)


def test_pooled_ridge_map_checks_task_count():
    data, design, _ = make_tasks()
    m = PooledRidgeTransfer().train(data, design)
    with pytest.raises(DimensionMismatch):
        m.test(data[:2])


class StackedJoint(JointMean):
    """Transfer learner whose map returns one stacked matrix for the collection."""

    def map(self, X, params):
        return np.vstack(X) + params


class JointScale(Method):
    transfer = True

    def estimate(self, X, Y):
        return float(np.mean(np.vstack(Y)))

    def map(self, X, params):
        if isinstance(X, list):
            return [x * params for x in X]
        return X * params


def test_transfer_stacked_result_returned_unchanged():
    data = [np.zeros((2, 3)), np.ones((2, 3))]
    design = [np.zeros((2, 1)), np.zeros((2, 1))]
    out = StackedJoint().train(data, design).test(data)
    assert isinstance(out, np.ndarray)
    assert out.shape == (4, 3)
    assert np.allclose(out[2:], 1.0)


def test_transfer_trained_on_one_member_applied_to_single_dataset():
    m = JointScale().train([np.ones((4, 2, 3))], [np.full((4, 1), 2.0)])
    out = m.test(np.ones((3, 2, 3)))
    assert out.shape == (3, 2, 3)
    assert np.allclose(out, 2.0)


def test_transfer_trained_on_many_members_applied_to_single_dataset():
    data = [np.ones((4, 2, 3)), np.ones((5, 6))]
    design = [np.full((4, 1), 3.0), np.full((5, 1), 3.0)]
    m = JointScale().train(data, design)
    out = m.test(np.ones((3, 2, 3)))
    # no single recorded shape to restore to
    assert out.shape == (3, 6)
    assert np.allclose(out, 3.0)


def test_pooled_ridge_single_member_applied_to_dataset():
    data, design, w = make_tasks(n_tasks=1)
    m = PooledRidgeTransfer().train(data, design)
    pred = m.test(data[0])
    assert isinstance(pred, np.ndarray)
    assert np.allclose(pred, design[0], atol=1e-6)
