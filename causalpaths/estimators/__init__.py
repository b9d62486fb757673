from .paths import PathRegression, PathRegressionResult

__all__ = ["PathRegression", "PathRegressionResult"]
