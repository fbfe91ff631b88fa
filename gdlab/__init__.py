"""Gradient descent optimizers, regression objectives, datasets and demos."""

__version__ = "0.1.0"
__all__ = ["dataset", "optimizers", "model", "demos"]