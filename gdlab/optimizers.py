"""Gradient-descent optimisers for scalar and vector objectives."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Tuple, Union

Vector = list[float]
ObjectiveND = Callable[[Vector], float]
GradientND = Callable[[Vector], Sequence[float]]
Logger = Callable[[str], object]
Step = Callable[[int, Any], Tuple[Any, float, str]]

_GIVE_UP = "Did not converge within {} iterations."


@dataclass
class OptimizeResult:
    """Outcome of an optimisation run."""

    x: Union[float, Vector]
    iterations: int
    converged: bool


def _emit(log: Logger | None, message: str) -> None:
    if log is not None:
        log(message)


def _gradient(grad: GradientND, x: Vector) -> Vector:
    g = [float(value) for value in grad(list(x))]
    if len(g) != len(x):
        raise ValueError(f"gradient has {len(g)} components, expected {len(x)}")
    return g


def _line(t: int, f: ObjectiveND, x: Vector, label: str, value: float) -> str:
    return f"Iter {t:3d} | f(x) = {f(x):.6f} | {label} = {value:.6f}"


def _iterate(
    step: Step,
    x: Any,
    max_iters: int,
    tol: float,
    log: Logger | None,
    give_up: str | None,
) -> OptimizeResult:
    """Run ``step`` until its change measure drops below ``tol``."""
    for t in range(1, max_iters + 1):
        x, change, message = step(t, x)
        _emit(log, message)
        if change < tol:
            _emit(log, f"Converged in {t} iterations.")
            return OptimizeResult(x, t, True)
    if give_up is not None:
        _emit(log, give_up.format(max_iters))
    return OptimizeResult(x, max(max_iters, 0), False)


def norm_squared(v: Sequence[float]) -> float:
    """Sum of the squares of the components of ``v``."""
    return sum(value * value for value in v)


def gradient_descent(
    f: Callable[[float], float],
    grad: Callable[[float], float],
    x0: float,
    lr: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """Plain gradient descent on a function of one variable."""

    def step(t: int, x: float) -> Tuple[float, float, str]:
        g = grad(x)
        new = x - lr * g
        message = f"Iter {t:3d} | x = {new:.6f} | f(x) = {f(new):.6f} | grad = {g:.6f}"
        return new, abs(new - x), message

    return _iterate(
        step, float(x0), max_iters, tol, log,
        "Stopped after {} iterations (didn't converge).",
    )


def gradient_descent_multi(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """Plain gradient descent; stops when the squared norm of x settles."""

    def step(t: int, x: Vector) -> Tuple[Vector, float, str]:
        g = _gradient(grad, x)
        new = [xj - lr * gj for xj, gj in zip(x, g)]
        new_sum = norm_squared(new)
        change = abs(new_sum - norm_squared(x))
        return new, change, _line(t, f, new, "grad_norm", math.sqrt(new_sum))

    return _iterate(step, [float(v) for v in x0], max_iters, tol, log, _GIVE_UP)


def gradient_descent_armijo(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    alpha_init: float,
    beta: float,
    c: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """Gradient descent with a backtracking Armijo line search."""

    def step(t: int, x: Vector) -> Tuple[Vector, float, str]:
        g = _gradient(grad, x)
        grad_norm2 = norm_squared(g)
        fx = f(x)
        alpha = alpha_init
        while True:
            new = [xj - alpha * gj for xj, gj in zip(x, g)]
            if f(new) <= fx - c * alpha * grad_norm2:
                break
            alpha *= beta
            if alpha < 1e-10:
                break
        diff = sum(abs(old - n) for old, n in zip(x, new))
        return new, diff, _line(t, f, new, "alpha", alpha)

    return _iterate(step, [float(v) for v in x0], max_iters, tol, log, _GIVE_UP)


def _momentum(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    momentum: float,
    max_iters: int,
    tol: float,
    log: Logger | None,
    lookahead: bool,
) -> OptimizeResult:
    x_start = [float(v) for v in x0]
    velocity = [0.0] * len(x_start)

    def step(t: int, x: Vector) -> Tuple[Vector, float, str]:
        nonlocal velocity
        point = (
            [xj + momentum * vj for xj, vj in zip(x, velocity)] if lookahead else x
        )
        g = _gradient(grad, point)
        velocity = [momentum * vj - lr * gj for vj, gj in zip(velocity, g)]
        new = [xj + vj for xj, vj in zip(x, velocity)]
        change = sum(abs(vj) for vj in velocity)
        if lookahead:
            message = _line(t, f, new, "change", change)
        else:
            message = _line(
                t, f, new, "velocity_norm", math.sqrt(norm_squared(velocity))
            )
        return new, change, message

    give_up = None if lookahead else _GIVE_UP
    return _iterate(step, x_start, max_iters, tol, log, give_up)


def gradient_descent_momentum(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    momentum: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """Gradient descent with classical momentum."""
    return _momentum(f, grad, x0, lr, momentum, max_iters, tol, log, False)


def gradient_descent_nesterov(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    momentum: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """Nesterov accelerated gradient: the gradient is taken at a look-ahead point."""
    return _momentum(f, grad, x0, lr, momentum, max_iters, tol, log, True)


def gradient_descent_adam(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    beta1: float,
    beta2: float,
    epsilon: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """The Adam optimiser with bias-corrected moment estimates."""
    x_start = [float(v) for v in x0]
    m = [0.0] * len(x_start)
    v = [0.0] * len(x_start)

    def step(t: int, x: Vector) -> Tuple[Vector, float, str]:
        g = _gradient(grad, x)
        new = list(x)
        change = 0.0
        for i, gi in enumerate(g):
            m[i] = beta1 * m[i] + (1 - beta1) * gi
            v[i] = beta2 * v[i] + (1 - beta2) * gi * gi
            m_hat = m[i] / (1 - beta1**t)
            v_hat = v[i] / (1 - beta2**t)
            delta = lr * m_hat / (math.sqrt(v_hat) + epsilon)
            new[i] -= delta
            change += abs(delta)
        return new, change, _line(t, f, new, "change", change)

    return _iterate(step, x_start, max_iters, tol, log, None)


def _adaptive(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    epsilon: float,
    max_iters: int,
    tol: float,
    log: Logger | None,
    accumulate: Callable[[float, float], float],
) -> OptimizeResult:
    x_start = [float(v) for v in x0]
    acc = [0.0] * len(x_start)

    def step(t: int, x: Vector) -> Tuple[Vector, float, str]:
        g = _gradient(grad, x)
        new = list(x)
        change = 0.0
        for i, gi in enumerate(g):
            acc[i] = accumulate(acc[i], gi)
            delta = lr / (math.sqrt(acc[i]) + epsilon) * gi
            new[i] -= delta
            change += abs(delta)
        return new, change, _line(t, f, new, "change", change)

    return _iterate(step, x_start, max_iters, tol, log, None)


def gradient_descent_adagrad(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    epsilon: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """Adagrad: step sizes scaled by the accumulated squared gradients."""
    return _adaptive(
        f, grad, x0, lr, epsilon, max_iters, tol, log,
        lambda total, g: total + g * g,
    )


def gradient_descent_rmsprop(
    f: ObjectiveND,
    grad: GradientND,
    x0: Sequence[float],
    lr: float,
    beta: float,
    epsilon: float,
    max_iters: int,
    tol: float,
    log: Logger | None = None,
) -> OptimizeResult:
    """RMSProp: step sizes scaled by a moving average of squared gradients."""
    return _adaptive(
        f, grad, x0, lr, epsilon, max_iters, tol, log,
        lambda avg, g: beta * avg + (1 - beta) * g * g,
    )