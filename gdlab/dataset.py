"""Tabular datasets: CSV loading, normalisation, sample data and splitting."""

from __future__ import annotations

import math
import random
import re
from dataclasses import dataclass, field
from os import PathLike

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_LABELS = (("Setosa", 0.0), ("Versicolor", 1.0))


@dataclass
class Dataset:
    """Feature rows ``X`` with one target per row in ``y``."""

    X: list[list[float]]
    y: list[float]
    width: int | None = field(default=None)

    def __post_init__(self) -> None:
        if len(self.X) != len(self.y):
            raise ValueError(
                f"X has {len(self.X)} rows but y has {len(self.y)} targets"
            )
        if self.width is None:
            self.width = len(self.X[0]) if self.X else 0
        for row in self.X:
            if len(row) != self.width:
                raise ValueError(
                    f"row of length {len(row)} in a dataset of width {self.width}"
                )

    @property
    def n(self) -> int:
        """Number of samples."""
        return len(self.y)

    @property
    def d(self) -> int:
        """Number of columns per sample, bias column included."""
        return self.width


def _atof(text: str) -> float:
    """Parse the longest leading number in ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def load_csv(path: str | PathLike, features: int) -> Dataset:
    """Load a two-class iris-style CSV.

    Each kept row becomes ``[1.0, f1, ..., f_features]``. Rows labelled
    Setosa get target 0, Versicolor 1; every other row is skipped.
    """
    X: list[list[float]] = []
    y: list[float] = []
    with open(path, "r", encoding="utf-8") as handle:
        for line in handle:
            tokens = [token for token in line.split(",") if token]
            if len(tokens) < features:
                raise ValueError(
                    f"line has {len(tokens)} fields, expected at least {features}: {line!r}"
                )
            values = [_atof(token) for token in tokens[:features]]
            label_token = tokens[features] if len(tokens) > features else None
            if label_token is None:
                continue
            label = next(
                (value for name, value in _LABELS if name in label_token), None
            )
            if label is None:
                continue
            X.append([1.0, *values])
            y.append(label)
    return Dataset(X, y, width=features + 1)


def normalize_features(data: Dataset) -> None:
    """Standardise every column but the bias column, in place."""
    if data.n == 0:
        raise ValueError("cannot normalise an empty dataset")
    for j in range(1, data.d):
        column = [row[j] for row in data.X]
        mean = sum(column) / data.n
        std = math.sqrt(sum((value - mean) ** 2 for value in column) / data.n)
        for row in data.X:
            row[j] = (row[j] - mean) / (std + 1e-8)


def create_sample_dataset() -> Dataset:
    """A small fixed two-class dataset: a bias column and one feature."""
    features = [1.0, 2.0, 1.5, 0.5, 4.0, 5.0, 4.5, 6.0]
    labels = [0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0]
    return Dataset([[1.0, value] for value in features], labels, width=2)


def train_test_split(
    data: Dataset, test_ratio: float, rng: random.Random | None = None
) -> tuple[Dataset, Dataset]:
    """Shuffle the samples and split them into ``(train, test)``.

    The test set holds ``int(n * test_ratio)`` samples. Rows are copied.
    """
    if not 0.0 <= test_ratio <= 1.0:
        raise ValueError(f"test_ratio must lie in [0, 1], got {test_ratio}")
    rng = rng if rng is not None else random.Random()
    test_size = int(data.n * test_ratio)
    train_size = data.n - test_size

    indices = list(range(data.n))
    rng.shuffle(indices)

    def subset(chosen: list[int]) -> Dataset:
        return Dataset(
            [list(data.X[i]) for i in chosen],
            [data.y[i] for i in chosen],
            width=data.d,
        )

    return subset(indices[:train_size]), subset(indices[train_size:])