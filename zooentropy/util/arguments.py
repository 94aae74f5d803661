from collections.abc import Mapping

import numpy as np
import pandas as pd

from zooentropy.util.errors import EmptyInputError

CATEGORICAL = 'categorical'
CONTINUOUS = 'continuous'
VARIABLE_TYPES = (CATEGORICAL, CONTINUOUS)


def check_sequence(x, name='x') -> pd.Series:
    """Process a 1d sequence argument into a positionally-indexed pandas Series.
    Never returns a view of the caller's data.
    """
    if isinstance(x, pd.DataFrame):
        if x.shape[1] != 1:
            raise ValueError("{} should be 1-dimensional, got a data frame with {} columns".format(
                name, x.shape[1]))
        x = x.iloc[:, 0]
    if isinstance(x, pd.Series):
        x = x.reset_index(drop=True)
    else:
        x = np.asarray(x, dtype=object) if not isinstance(x, np.ndarray) else x
        if x.ndim != 1:
            raise ValueError("{} should be 1-dimensional, got shape {}".format(name, x.shape))
        x = pd.Series(x)
    if len(x) == 0:
        raise EmptyInputError("{} has zero observations".format(name))
    return x.copy()


def check_table(X) -> pd.DataFrame:
    """Process a table argument (data frame, mapping of column name to sequence, or 2d array)
    into a positionally-indexed data frame.
    """
    if isinstance(X, pd.DataFrame):
        X = X.reset_index(drop=True)
    elif isinstance(X, Mapping):
        columns = {col: check_sequence(values, name=col) for col, values in X.items()}
        lengths = {col: len(values) for col, values in columns.items()}
        if len(set(lengths.values())) > 1:
            raise ValueError("all columns should have the same length, got {}".format(lengths))
        X = pd.DataFrame(columns)
    else:
        X = np.asarray(X)
        if X.ndim != 2:
            raise ValueError("X should be 2-dimensional, got shape {}".format(X.shape))
        X = pd.DataFrame(X, columns=['X' + str(i) for i in range(X.shape[1])])
    if X.shape[0] == 0:
        raise EmptyInputError("table has zero rows")
    return X.copy()


def check_variable_type(variable_type):
    if variable_type not in VARIABLE_TYPES:
        raise ValueError("Valid options for 'variable_type' are {}. Got variable_type={!r} instead."
                         .format(VARIABLE_TYPES, variable_type))
    return variable_type


def check_columns(X, cols, arg_name='continuous_cols'):
    """Check that every name in cols is a column of X.
    """
    cols = list(cols)
    for col in cols:
        if col not in X.columns:
            raise ValueError("{} (in {}) is not a column in X.".format(col, arg_name))
    return cols
