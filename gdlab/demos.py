"""Demonstration runs of the optimisers and regression models."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Callable, Sequence, TextIO

from gdlab.dataset import Dataset, create_sample_dataset, load_csv, train_test_split
from gdlab.model import (
    LogisticObjective,
    MSEObjective,
    SoftmaxObjective,
    predict_sample,
    train_logistic,
)
from gdlab.optimizers import (
    OptimizeResult,
    gradient_descent,
    gradient_descent_adagrad,
    gradient_descent_adam,
    gradient_descent_armijo,
    gradient_descent_momentum,
    gradient_descent_multi,
    gradient_descent_nesterov,
    gradient_descent_rmsprop,
)


def quadratic_2d(x: Sequence[float]) -> float:
    """``(x0 - 1)^2 + (x1 + 2)^2``, minimal at ``[1, -2]``."""
    return (x[0] - 1) ** 2 + (x[1] + 2) ** 2


def quadratic_2d_grad(x: Sequence[float]) -> list[float]:
    """Gradient of :func:`quadratic_2d`."""
    return [2 * (x[0] - 1), 2 * (x[1] + 2)]


def _stream(out: TextIO | None) -> TextIO:
    return out if out is not None else sys.stdout


def _printer(out: TextIO | None) -> Callable[[str], None]:
    stream = _stream(out)
    return lambda message: print(message, file=stream)


def _report_2d(result: OptimizeResult, out: TextIO | None) -> OptimizeResult:
    x = result.x
    print(f"Minimum found at x = [{x[0]:.6f}, {x[1]:.6f}]", file=_stream(out))
    return result


def run_scalar_1d(out: TextIO | None = None) -> OptimizeResult:
    """Minimise ``(x - 3)^2`` from ``x = 0``."""
    result = gradient_descent(
        lambda x: (x - 3) * (x - 3), lambda x: 2 * (x - 3),
        0.0, 0.1, 100, 1e-6, _printer(out),
    )
    print(f"Minimum found at x = {result.x:.6f}", file=_stream(out))
    return result


def run_multidim(out: TextIO | None = None) -> OptimizeResult:
    """Plain gradient descent on the 2-D quadratic."""
    result = gradient_descent_multi(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 0.1, 100, 1e-6, _printer(out)
    )
    return _report_2d(result, out)


def run_armijo(out: TextIO | None = None) -> OptimizeResult:
    """Armijo line search on the 2-D quadratic."""
    result = gradient_descent_armijo(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 1.0, 0.5, 1e-4, 100, 1e-6,
        _printer(out),
    )
    return _report_2d(result, out)


def run_momentum(out: TextIO | None = None) -> OptimizeResult:
    """Momentum descent on the 2-D quadratic."""
    result = gradient_descent_momentum(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 0.1, 0.9, 100, 1e-6, _printer(out)
    )
    return _report_2d(result, out)


def run_adam(out: TextIO | None = None) -> OptimizeResult:
    """Adam on the 2-D quadratic."""
    print("Training with Adam Optimizer...", file=_stream(out))
    result = gradient_descent_adam(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 0.1, 0.9, 0.999, 1e-8, 1000, 1e-6,
        _printer(out),
    )
    return _report_2d(result, out)


def run_adagrad(out: TextIO | None = None) -> OptimizeResult:
    """Adagrad on the 2-D quadratic."""
    print("Training with Adagrad Optimizer...", file=_stream(out))
    result = gradient_descent_adagrad(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 1.0, 1e-8, 1000, 1e-6, _printer(out)
    )
    return _report_2d(result, out)


def run_rmsprop(out: TextIO | None = None) -> OptimizeResult:
    """RMSProp on the 2-D quadratic."""
    print("Training with RMSProp Optimizer...", file=_stream(out))
    result = gradient_descent_rmsprop(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 0.01, 0.9, 1e-8, 1000, 1e-6,
        _printer(out),
    )
    return _report_2d(result, out)


def run_nesterov(out: TextIO | None = None) -> OptimizeResult:
    """Nesterov accelerated gradient on the 2-D quadratic."""
    print("Training with Nesterov Accelerated Gradient...", file=_stream(out))
    result = gradient_descent_nesterov(
        quadratic_2d, quadratic_2d_grad, [0.0, 0.0], 0.1, 0.9, 1000, 1e-6, _printer(out)
    )
    return _report_2d(result, out)


def run_linear_regression(out: TextIO | None = None) -> dict[str, list[float]]:
    """Fit the sample dataset by least squares with three optimisers."""
    data = create_sample_dataset()
    objective = MSEObjective(data)
    start = [0.0] * data.d
    log = _printer(out)
    max_iters, tol, lr = 1000, 1e-6, 0.1
    runs: dict[str, Callable[[], OptimizeResult]] = {
        "Momentum": lambda: gradient_descent_momentum(
            objective.loss, objective.grad, start, lr, 0.9, max_iters, tol, log
        ),
        "Nesterov": lambda: gradient_descent_nesterov(
            objective.loss, objective.grad, start, lr, 0.9, max_iters, tol, log
        ),
        "Adam": lambda: gradient_descent_adam(
            objective.loss, objective.grad, start, lr, 0.9, 0.999, 1e-8, max_iters, tol, log
        ),
    }
    results: dict[str, list[float]] = {}
    for name, run in runs.items():
        log(f"\n--- {name} ---")
        weights = run().x
        log(f"Final Weights [{name}]:" + "".join(f" {w:.6f}" for w in weights))
        results[name] = weights
    return results


def run_logistic_regression(out: TextIO | None = None) -> list[float]:
    """Fit logistic regression to the sample dataset and print predictions."""
    data = create_sample_dataset()
    objective = LogisticObjective(data)
    log = _printer(out)
    log("Training Logistic Regression with Gradient Descent...")
    weights = gradient_descent_multi(
        objective.loss, objective.grad, [0.0] * data.d, 0.1, 1000, 1e-6, log
    ).x
    log("Trained weights:")
    for i, w in enumerate(weights):
        log(f"  w[{i}] = {w:.6f}")
    log("Predictions:")
    for i, (row, label) in enumerate(zip(data.X, data.y)):
        log(f"  Sample {i}: Pred = {predict_sample(weights, row):.4f} | Label = {label:.0f}")
    return weights


def train_softmax(
    data: Dataset,
    num_classes: int,
    lr: float,
    max_iters: int,
    tol: float,
    log: Callable[[str], object] | None = None,
) -> list[list[float]]:
    """Gradient descent on softmax regression; returns one weight row per class."""
    objective = SoftmaxObjective(data)
    W = [[0.0] * data.d for _ in range(num_classes)]
    for it in range(1, max_iters + 1):
        grad = objective.grad(W)
        change = 0.0
        for w_row, g_row in zip(W, grad):
            for j, g in enumerate(g_row):
                delta = lr * g
                w_row[j] -= delta
                change += abs(delta)
        if log is not None:
            log(f"Iter {it:3d} | loss = {objective.loss(W):.6f} | change = {change:.6f}")
        if change < tol:
            break
    return W


def run_softmax_regression(out: TextIO | None = None) -> list[list[float]]:
    """Three-class softmax regression on the sample dataset."""
    log = _printer(out)
    W = train_softmax(create_sample_dataset(), 3, 0.1, 1000, 1e-6, log)
    log("Final Weights:")
    for c, row in enumerate(W):
        log(f"Class {c}: " + "".join(f"{w:.4f} " for w in row))
    return W


def run_iris(
    path: str = "data/iris.csv",
    out: TextIO | None = None,
    rng: random.Random | None = None,
) -> float:
    """Train Setosa-vs-Versicolor logistic regression; return test accuracy."""
    data = load_csv(path, 4)
    train, test = train_test_split(data, 0.2, rng)
    if test.n == 0:
        raise ValueError("the test split is empty")
    weights = train_logistic(train, [0.0] * train.d, 0.1, 1000)
    log = _printer(out)
    correct = 0
    for i, (row, target) in enumerate(zip(test.X, test.y)):
        prob = predict_sample(weights, row)
        pred = 1 if prob >= 0.5 else 0
        label = int(target)
        if i < 10:
            log(f"Sample {i}: pred = {prob:.4f} | class {pred} | label = {label}")
        if pred == label:
            correct += 1
    log(f"\n✅ Test Accuracy: {100.0 * correct / test.n:.2f}% ({correct}/{test.n})")
    return correct / test.n


_DEMOS: dict[str, Callable[[TextIO | None], object]] = {
    "scalar_1d": run_scalar_1d,
    "multidim": run_multidim,
    "armijo": run_armijo,
    "momentum": run_momentum,
    "adam": run_adam,
    "adagrad": run_adagrad,
    "rmsprop": run_rmsprop,
    "nesterov": run_nesterov,
    "linear": run_linear_regression,
    "logistic": run_logistic_regression,
    "softmax": run_softmax_regression,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one demonstration by name."""
    parser = argparse.ArgumentParser(prog="gdlab", description="Gradient descent demos.")
    parser.add_argument("demo", choices=[*_DEMOS, "iris"])
    parser.add_argument("--data", default="data/iris.csv", help="iris CSV for the iris demo")
    args = parser.parse_args(argv)
    if args.demo == "iris":
        try:
            run_iris(args.data)
        except (OSError, ValueError) as exc:
            print(f"Failed to load dataset: {exc}", file=sys.stderr)
            return 1
        return 0
    _DEMOS[args.demo](None)
    return 0


if __name__ == "__main__":
    sys.exit(main())