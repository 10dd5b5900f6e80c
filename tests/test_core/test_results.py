import numpy as np

from localopt import IterationStatus, PointState, Results


def make_results(status=IterationStatus.SUCCESS) -> Results:
    states = [
        PointState(f=4.0, x=np.array([2.0])).clone(),
        PointState(f=1.0, x=np.array([1.0])).clone(),
        PointState(f=0.0, x=np.array([0.0])).clone(),
    ]
    return Results(
        status=status,
        message="done",
        num_iter=2,
        num_func_eval=3,
        num_grad_eval=3,
        num_hess_eval=0,
        states=states,
    )


def test_final_values():
    res = make_results()
    assert res.converged
    assert res.f_min == 0.0
    assert np.array_equal(res.x_min, [0.0])
    assert res.time is None


def test_history_views():
    res = make_results()
    assert len(res) == 3
    assert res.trajectory.shape == (3, 1)
    assert np.array_equal(res.f_history, [4.0, 1.0, 0.0])
    assert [state.f for state in res] == [4.0, 1.0, 0.0]


def test_not_converged_for_other_statuses():
    assert not make_results(IterationStatus.NO_PROGRESS).converged
    assert not make_results(IterationStatus.OUT_OF_CONTROL).converged
