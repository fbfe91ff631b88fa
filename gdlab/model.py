"""Loss functions and gradients for linear, logistic and softmax regression."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from gdlab.dataset import Dataset

_LOG_EPS = 1e-8


def sigmoid(z: float) -> float:
    """The logistic function, evaluated without overflow for large ``|z|``."""
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def compute_softmax(z: Sequence[float]) -> list[float]:
    """Numerically stable softmax of the scores ``z``."""
    if not z:
        raise ValueError("softmax of an empty vector")
    top = max(z)
    exps = [math.exp(value - top) for value in z]
    total = sum(exps)
    return [value / total for value in exps]


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


def _check_data(data: Dataset) -> None:
    if data.n == 0:
        raise ValueError("objective needs a non-empty dataset")


def _check_width(data: Dataset, width: int) -> None:
    if width > data.d:
        raise ValueError(f"{width} weights for a dataset of width {data.d}")


@dataclass
class MSEObjective:
    """Mean squared error of the linear model ``X @ w`` against ``y``."""

    data: Dataset

    def __post_init__(self) -> None:
        _check_data(self.data)

    def _errors(self, weights: Sequence[float]) -> list[float]:
        _check_width(self.data, len(weights))
        return [_dot(row, weights) - target for row, target in zip(self.data.X, self.data.y)]

    def loss(self, weights: Sequence[float]) -> float:
        """Mean of the squared residuals."""
        return sum(e * e for e in self._errors(weights)) / self.data.n

    def grad(self, weights: Sequence[float]) -> list[float]:
        """Gradient of :meth:`loss` with respect to the weights."""
        grad = [0.0] * len(weights)
        for row, error in zip(self.data.X, self._errors(weights)):
            for j in range(len(grad)):
                grad[j] += 2 * error * row[j]
        return [value / self.data.n for value in grad]


@dataclass
class LogisticObjective:
    """Mean binary cross-entropy of ``sigmoid(X @ w)`` against ``y``."""

    data: Dataset

    def __post_init__(self) -> None:
        _check_data(self.data)

    def _predictions(self, weights: Sequence[float]) -> list[float]:
        _check_width(self.data, len(weights))
        return [sigmoid(_dot(row, weights)) for row in self.data.X]

    def loss(self, weights: Sequence[float]) -> float:
        """Mean cross-entropy loss."""
        total = 0.0
        for pred, y in zip(self._predictions(weights), self.data.y):
            total += -y * math.log(pred + _LOG_EPS) - (1 - y) * math.log(1 - pred + _LOG_EPS)
        return total / self.data.n

    def grad(self, weights: Sequence[float]) -> list[float]:
        """Gradient of the cross-entropy with respect to the weights."""
        grad = [0.0] * len(weights)
        for row, pred, y in zip(self.data.X, self._predictions(weights), self.data.y):
            error = pred - y
            for j in range(len(grad)):
                grad[j] += error * row[j]
        return [value / self.data.n for value in grad]


@dataclass
class SoftmaxObjective:
    """Multi-class cross-entropy for a weight matrix with one row per class."""

    data: Dataset

    def __post_init__(self) -> None:
        _check_data(self.data)

    def _samples(self, W: Sequence[Sequence[float]]):
        if not W:
            raise ValueError("weight matrix has no classes")
        for weights in W:
            _check_width(self.data, len(weights))
        for row, target in zip(self.data.X, self.data.y):
            label = int(target)
            if not 0 <= label < len(W):
                raise ValueError(f"label {label} outside {len(W)} classes")
            prob = compute_softmax([_dot(weights, row) for weights in W])
            yield row, label, prob

    def loss(self, W: Sequence[Sequence[float]]) -> float:
        """Mean negative log-probability of the true class."""
        total = sum(-math.log(prob[label] + _LOG_EPS) for _, label, prob in self._samples(W))
        return total / self.data.n

    def grad(self, W: Sequence[Sequence[float]]) -> list[list[float]]:
        """Gradient of :meth:`loss`, shaped like ``W``."""
        grad = [[0.0] * len(weights) for weights in W]
        for row, label, prob in self._samples(W):
            for c, grad_row in enumerate(grad):
                error = prob[c] - (1.0 if c == label else 0.0)
                for j in range(len(grad_row)):
                    grad_row[j] += error * row[j]
        return [[value / self.data.n for value in grad_row] for grad_row in grad]


def train_logistic(
    data: Dataset, weights: Sequence[float], lr: float, max_iter: int
) -> list[float]:
    """Batch gradient descent on logistic regression for ``max_iter`` steps."""
    objective = LogisticObjective(data)
    w = [float(value) for value in weights]
    if len(w) != data.d:
        raise ValueError(f"{len(w)} weights for a dataset of width {data.d}")
    for _ in range(max_iter):
        grad = objective.grad(w)
        w = [wj - lr * gj for wj, gj in zip(w, grad)]
    return w


def predict_sample(w: Sequence[float], x: Sequence[float]) -> float:
    """Probability of class 1 for the sample ``x``."""
    if len(w) != len(x):
        raise ValueError(f"{len(w)} weights for a sample of length {len(x)}")
    return sigmoid(_dot(w, x))