import random
from collections import Counter

import pytest

from gdlab.dataset import (
    Dataset,
    create_sample_dataset,
    load_csv,
    normalize_features,
    train_test_split,
)


def _write(tmp_path, text):
    path = tmp_path / "data.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_sample_dataset_shape_and_labels():
    data = create_sample_dataset()
    assert data.n == 8
    assert data.d == 2
    assert data.y == [0, 0, 0, 0, 1, 1, 1, 1]
    assert all(row[0] == 1.0 for row in data.X)
    assert data.X[7] == [1.0, 6.0]


def test_dataset_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Dataset([[1.0, 2.0]], [0.0, 1.0])


def test_dataset_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Dataset([[1.0, 2.0], [1.0]], [0.0, 1.0])


def test_load_csv_keeps_two_classes_and_adds_bias(tmp_path):
    path = _write(
        tmp_path,
        "sepal.length,sepal.width,petal.length,petal.width,variety\n"
        "5.1,3.5,1.4,0.2,Setosa\n"
        "7.0,3.2,4.7,1.4,Versicolor\n"
        "6.3,3.3,6.0,2.5,Virginica\n",
    )
    data = load_csv(path, 4)
    assert data.n == 2
    assert data.d == 5
    assert data.X[0] == [1.0, 5.1, 3.5, 1.4, 0.2]
    assert data.X[1] == [1.0, 7.0, 3.2, 4.7, 1.4]
    assert data.y == [0.0, 1.0]


def test_load_csv_reads_numeric_prefix_and_quoted_labels(tmp_path):
    path = _write(tmp_path, '5.1cm,abc,"Setosa"\n')
    data = load_csv(path, 2)
    assert data.X == [[1.0, 5.1, 0.0]]
    assert data.y == [0.0]


def test_load_csv_empty_file_keeps_width(tmp_path):
    data = load_csv(_write(tmp_path, ""), 4)
    assert data.n == 0
    assert data.d == 5


def test_load_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv(tmp_path / "absent.csv", 4)


def test_load_csv_short_line(tmp_path):
    with pytest.raises(ValueError):
        load_csv(_write(tmp_path, "5.1\n"), 4)


def test_normalize_features_standardises_columns():
    data = create_sample_dataset()
    normalize_features(data)
    column = [row[1] for row in data.X]
    mean = sum(column) / len(column)
    var = sum((v - mean) ** 2 for v in column) / len(column)
    assert mean == pytest.approx(0.0, abs=1e-9)
    assert var == pytest.approx(1.0, abs=1e-6)
    assert all(row[0] == 1.0 for row in data.X)


def test_normalize_features_empty():
    with pytest.raises(ValueError):
        normalize_features(Dataset([], [], width=3))


def test_split_sizes_and_partition():
    data = create_sample_dataset()
    train, test = train_test_split(data, 0.25, random.Random(7))
    assert train.n == 6
    assert test.n == 2
    assert train.d == test.d == data.d
    pairs = Counter(
        (tuple(row), label)
        for ds in (train, test)
        for row, label in zip(ds.X, ds.y)
    )
    original = Counter((tuple(row), label) for row, label in zip(data.X, data.y))
    assert pairs == original


def test_split_is_reproducible_with_seed():
    data = create_sample_dataset()
    first = train_test_split(data, 0.5, random.Random(3))
    second = train_test_split(data, 0.5, random.Random(3))
    assert first[0].X == second[0].X
    assert first[1].y == second[1].y


def test_split_copies_rows():
    data = create_sample_dataset()
    train, test = train_test_split(data, 0.0, random.Random(1))
    assert train.n == 8
    assert test.n == 0
    train.X[0][1] = -100.0
    assert train.X[0][1] == -100.0
    assert data.X == create_sample_dataset().X


def test_split_rejects_bad_ratio():
    with pytest.raises(ValueError):
        train_test_split(create_sample_dataset(), 1.5)