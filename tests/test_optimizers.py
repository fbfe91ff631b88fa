import pytest

from gdlab.optimizers import (
    gradient_descent,
    gradient_descent_adagrad,
    gradient_descent_adam,
    gradient_descent_armijo,
    gradient_descent_momentum,
    gradient_descent_multi,
    gradient_descent_nesterov,
    gradient_descent_rmsprop,
    norm_squared,
)


def func2d(x):
    return (x[0] - 1) ** 2 + (x[1] + 2) ** 2


def grad2d(x):
    return [2 * (x[0] - 1), 2 * (x[1] + 2)]


def f1(x):
    return (x - 3) ** 2


def df1(x):
    return 2 * (x - 3)


def test_norm_squared_matches_sum_of_squares():
    v = [3.0, -4.0, 0.5]
    assert norm_squared(v) == pytest.approx(sum(c * c for c in v))
    assert norm_squared([]) == 0.0


def test_scalar_descent_finds_minimum():
    lines = []
    result = gradient_descent(f1, df1, 0.0, 0.1, 100, 1e-6, log=lines.append)
    assert result.converged
    assert result.x == pytest.approx(3.0, abs=1e-4)
    assert lines[-1] == f"Converged in {result.iterations} iterations."
    assert len(lines) == result.iterations + 1


def test_scalar_descent_reports_non_convergence():
    lines = []
    result = gradient_descent(f1, df1, 0.0, 0.1, 2, 1e-6, log=lines.append)
    assert not result.converged
    assert result.iterations == 2
    assert lines[-1] == "Stopped after 2 iterations (didn't converge)."
    assert lines[0].startswith("Iter   1 | x = ")


def test_multi_descent_finds_minimum():
    result = gradient_descent_multi(func2d, grad2d, [0.0, 0.0], 0.1, 100, 1e-6)
    assert result.converged
    assert result.x == pytest.approx([1.0, -2.0], abs=1e-3)


def test_multi_zero_iterations_leaves_start():
    lines = []
    start = [0.5, 0.5]
    result = gradient_descent_multi(func2d, grad2d, start, 0.1, 0, 1e-6, log=lines.append)
    assert result.x == start
    assert not result.converged
    assert lines == ["Did not converge within 0 iterations."]


def test_start_point_not_mutated():
    start = [0.0, 0.0]
    gradient_descent_momentum(func2d, grad2d, start, 0.1, 0.9, 10, 1e-6)
    assert start == [0.0, 0.0]


def test_armijo_reaches_exact_minimum():
    lines = []
    result = gradient_descent_armijo(
        func2d, grad2d, [0.0, 0.0], 1.0, 0.5, 1e-4, 100, 1e-6, log=lines.append
    )
    assert result.converged
    assert result.x == pytest.approx([1.0, -2.0], abs=1e-12)
    assert lines[-1] == f"Converged in {result.iterations} iterations."


def test_armijo_never_increases_objective():
    values = []
    x = [5.0, 5.0]
    for _ in range(5):
        result = gradient_descent_armijo(func2d, grad2d, x, 1.0, 0.5, 1e-4, 1, 0.0)
        values.append(func2d(result.x))
        x = result.x
    assert all(b <= a for a, b in zip(values, values[1:]))


@pytest.mark.parametrize(
    "run",
    [
        lambda: gradient_descent_momentum(func2d, grad2d, [0.0, 0.0], 0.1, 0.9, 1000, 1e-6),
        lambda: gradient_descent_nesterov(func2d, grad2d, [0.0, 0.0], 0.1, 0.9, 1000, 1e-6),
        lambda: gradient_descent_adam(
            func2d, grad2d, [0.0, 0.0], 0.1, 0.9, 0.999, 1e-8, 1000, 1e-6
        ),
        lambda: gradient_descent_adagrad(func2d, grad2d, [0.0, 0.0], 1.0, 1e-8, 1000, 1e-6),
        lambda: gradient_descent_rmsprop(
            func2d, grad2d, [0.0, 0.0], 0.01, 0.9, 1e-8, 1000, 1e-6
        ),
    ],
)
def test_optimizers_approach_minimum(run):
    result = run()
    assert result.x == pytest.approx([1.0, -2.0], abs=0.05)
    assert 1 <= result.iterations <= 1000
    assert func2d(result.x) < func2d([0.0, 0.0])


def test_momentum_logs_velocity_norm():
    lines = []
    gradient_descent_momentum(func2d, grad2d, [0.0, 0.0], 0.1, 0.9, 3, 1e-6, log=lines.append)
    assert len(lines) == 4
    assert "velocity_norm" in lines[0]
    assert lines[-1] == "Did not converge within 3 iterations."


def test_adam_has_no_non_convergence_message():
    lines = []
    result = gradient_descent_adam(
        func2d, grad2d, [0.0, 0.0], 0.1, 0.9, 0.999, 1e-8, 2, 1e-6, log=lines.append
    )
    assert not result.converged
    assert len(lines) == 2
    assert all(line.startswith("Iter") for line in lines)


def test_gradient_length_mismatch():
    with pytest.raises(ValueError):
        gradient_descent_multi(func2d, lambda x: [1.0], [0.0, 0.0], 0.1, 5, 1e-6)


def test_already_at_minimum_converges_first_step():
    result = gradient_descent_nesterov(func2d, grad2d, [1.0, -2.0], 0.1, 0.9, 50, 1e-6)
    assert result.converged
    assert result.iterations == 1
    assert result.x == [1.0, -2.0]