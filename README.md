# gdlab

gdlab is a small library of gradient descent optimizers. It also has the loss
functions and datasets needed to train linear, logistic and softmax regression
models. It is written in plain Python and uses only the standard library.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Optimizers

The optimizers are in `gdlab.optimizers`:

| Function | Method |
| --- | --- |
| `gradient_descent(f, grad, x0, lr, max_iters, tol, log=None)` | Plain descent on a function of one variable. |
| `gradient_descent_multi(f, grad, x0, lr, max_iters, tol, log=None)` | Plain descent in several dimensions. |
| `gradient_descent_armijo(f, grad, x0, alpha_init, beta, c, max_iters, tol, log=None)` | Step size from a backtracking Armijo line search. |
| `gradient_descent_momentum(f, grad, x0, lr, momentum, max_iters, tol, log=None)` | Classical momentum. |
| `gradient_descent_nesterov(f, grad, x0, lr, momentum, max_iters, tol, log=None)` | Nesterov accelerated gradient. |
| `gradient_descent_adam(f, grad, x0, lr, beta1, beta2, epsilon, max_iters, tol, log=None)` | Adam. |
| `gradient_descent_adagrad(f, grad, x0, lr, epsilon, max_iters, tol, log=None)` | Adagrad. |
| `gradient_descent_rmsprop(f, grad, x0, lr, beta, epsilon, max_iters, tol, log=None)` | RMSProp. |

In every case except `gradient_descent`, `f` takes a list of floats and
returns a float. `grad` returns one component per coordinate; if it returns a
different number, the optimizer raises `ValueError`.

The starting point is never modified. Each call returns an `OptimizeResult`
with these fields:

- `x`: the final point.
- `iterations`: the number of steps taken.
- `converged`: whether the change measure fell below `tol`.

If you pass a `log` callable, such as `print`, it gets one progress line per
iteration and a final line saying whether the run converged.

Each optimizer measures the change in its own way:

- Plain descent and `gradient_descent_multi` use the change in `x` and in its squared norm respectively.
- Armijo uses the L1 distance of the step.
- The others use the L1 norm of the velocity or update.

`norm_squared(v)` is also available.

```python
from gdlab.optimizers import gradient_descent_adam

def f(x):
    return (x[0] - 1) ** 2 + (x[1] + 2) ** 2

def grad(x):
    return [2 * (x[0] - 1), 2 * (x[1] + 2)]

result = gradient_descent_adam(f, grad, [0.0, 0.0], lr=0.1, beta1=0.9,
                               beta2=0.999, epsilon=1e-8, max_iters=1000,
                               tol=1e-6)
print(result.x, result.iterations, result.converged)
```

## Datasets

The datasets are in `gdlab.dataset`:

- `Dataset(X, y, width=None)` holds feature rows and one target per row. It raises `ValueError` if the two lengths differ or if the rows have uneven widths. `n` is the number of samples and `d` is the number of columns, including the bias column.
- `load_csv(path, features)` reads an iris-style CSV file. It keeps only rows labelled Setosa (target 0) or Versicolor (target 1). Each row it keeps becomes `[1.0, f1, ..., f_features]`.
- `normalize_features(data)` standardises every column except the bias column, in place.
- `create_sample_dataset()` returns a fixed set of 8 samples in two classes. Each sample has a bias column and one feature.
- `train_test_split(data, test_ratio, rng=None)` shuffles the rows with an optional `random.Random` and returns `(train, test)`. The test set has `int(n * test_ratio)` rows.

## Models

The models are in `gdlab.model`. There are three objectives, and each is bound
to a dataset:

- `MSEObjective(data)`
- `LogisticObjective(data)`
- `SoftmaxObjective(data)`

Each objective has `loss` and `grad` methods, so you can pass an objective
straight to any optimizer. `SoftmaxObjective` works on a weight matrix with one
row per class.

The module also has these functions:

- `train_logistic(data, weights, lr, max_iter)` runs batch gradient descent and returns new weights.
- `predict_sample(w, x)` returns the probability of class 1.
- `sigmoid(z)`.
- `compute_softmax(z)`.

```python
from gdlab.dataset import create_sample_dataset
from gdlab.model import MSEObjective
from gdlab.optimizers import gradient_descent_momentum

data = create_sample_dataset()
objective = MSEObjective(data)
result = gradient_descent_momentum(objective.loss, objective.grad,
                                   [0.0] * data.d, lr=0.1, momentum=0.9,
                                   max_iters=1000, tol=1e-6)
```

## Demos

The `gdlab` command runs one demonstration, which you choose by name. The
output goes to standard output.

```
gdlab adam
gdlab iris --data path/to/iris.csv
```

These demos minimise `(x0 - 1)^2 + (x1 + 2)^2`:

- `multidim`
- `armijo`
- `momentum`
- `adam`
- `adagrad`
- `rmsprop`
- `nesterov`

The `scalar_1d` demo minimises `(x - 3)^2`.

These demos fit models to the sample dataset:

- `linear` fits least squares with momentum, Nesterov and Adam.
- `logistic` fits logistic regression.
- `softmax` fits three-class softmax regression.

The `iris` demo trains a Setosa-versus-Versicolor classifier on a random 80/20
split and prints the test accuracy. If the file cannot be loaded, it prints
`Failed to load dataset` and exits with status 1.

You can also call the demos from Python: `run_adam`, `run_iris`,
`train_softmax` and the others are in `gdlab.demos`.

## What it does not include

gdlab does not include an iris data file. You must supply one for the `iris`
demo. By default the demo looks for `data/iris.csv` in the current directory.