import numbers

import numpy as np
import pandas as pd
from pandas.api.types import is_numeric_dtype
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_array, check_is_fitted

from zooentropy.util.arguments import check_sequence, check_table, check_columns
from zooentropy.util.errors import InsufficientDataError, InvalidBinCountError

"""
Quantile discretization of continuous measurements into ordinal classes.

Bins are numbered 1..n_bins and are closed on the right, with the lowest
bin also closed on the left:

    [b0, b1], (b1, b2], ..., (b_{k-1}, b_k]

so a value sitting exactly on a breakpoint goes to the lower-indexed bin
and the minimum is never excluded. When several breakpoints coincide
(many tied values) the bins between them stay empty, leaving fewer than
n_bins effective classes. Missing values get no bin (pd.NA).
"""

DEFAULT_N_BINS = 6


def check_n_bins(n_bins):
    """Check that n_bins is an integer >= 2.
    """
    if not isinstance(n_bins, numbers.Integral) or isinstance(n_bins, bool):
        raise InvalidBinCountError(
            "received an invalid n_bins type. "
            "Received {}, expected int.".format(type(n_bins).__name__))
    if n_bins < 2:
        raise InvalidBinCountError(
            "received an invalid number of bins. "
            "Received {}, expected at least 2.".format(n_bins))
    return int(n_bins)


def _as_float(x):
    return pd.to_numeric(x, errors='raise').to_numpy(dtype=float, na_value=np.nan)


def quantile_bin_edges(x, n_bins=DEFAULT_N_BINS, name='x') -> np.ndarray:
    """Breakpoints at probabilities 0, 1/n_bins, ..., 1 of the non-missing values of x.

    Parameters
    ----------
    x : array-like of shape (n_samples,)
        Continuous sequence, may contain missing values.

    n_bins : int, default=6
        Number of bins; must be at least 2.

    Returns
    -------
    bin_edges : array of shape (n_bins + 1,), non-decreasing
    """
    n_bins = check_n_bins(n_bins)
    values = _as_float(check_sequence(x, name=name))
    values = values[~np.isnan(values)]
    if values.shape[0] == 0:
        raise InsufficientDataError("{} has no non-missing values to compute quantiles from".format(name))
    return np.quantile(values, np.linspace(0, 1, n_bins + 1))


def discretize_to_bins(x, bin_edges, name='x') -> pd.Series:
    """Assign each value of x to a bin given bin edges.

    Values below the first or above the last edge fall into the outermost
    bins, so edges learned on one sample can be applied to another.

    Returns
    -------
    xd : Int64 Series aligned with x, bin ids in [1, len(bin_edges) - 1],
        pd.NA where x is missing
    """
    x = check_sequence(x, name=name)
    bin_edges = np.asarray(bin_edges, dtype=float)
    values = _as_float(x)
    missing = np.isnan(values)

    # side='left' puts a value equal to an edge in the bin that edge closes
    xd = np.searchsorted(bin_edges, values, side='left')
    xd = np.clip(xd, 1, len(bin_edges) - 1)
    return pd.Series(pd.arrays.IntegerArray(xd.astype('int64'), missing), index=x.index, name=x.name)


def quantile_discretize(x, n_bins=DEFAULT_N_BINS, name='x') -> pd.Series:
    """Bin a continuous sequence into n_bins quantile classes (see module notes for tie handling).
    """
    bin_edges = quantile_bin_edges(x, n_bins=n_bins, name=name)
    return discretize_to_bins(x, bin_edges, name=name)


class QuantileDiscretizer(TransformerMixin, BaseEstimator):
    """
    Discretize numeric columns of a data frame into ordinal quantile bins.

    Params
    ------
    n_bins : int or array-like of shape (len(dcols),), default=6
        Number of bins to discretize each feature into.

    dcols : list of strings
        The names of the columns to be discretized; by default,
        discretize all float and int columns in X.

    Attributes
    ----------
    dcols_ : list of strings
        Columns that were discretized.

    n_bins_ : array of shape (len(dcols_),)
        Number of bins per column in dcols_.

    bin_edges_ : dictionary where
        key = feature name
        value = array of quantile bin edges learned in fit
    """

    def __init__(self, n_bins=DEFAULT_N_BINS, dcols=[]):
        self.n_bins = n_bins
        self.dcols = dcols

    def _validate_n_bins(self):
        """
        Check if n_bins argument is valid.
        """
        orig_bins = self.n_bins
        n_features = len(self.dcols_)
        if isinstance(orig_bins, numbers.Number):
            return np.full(n_features, check_n_bins(orig_bins), dtype=int)

        n_bins = check_array(orig_bins, dtype=None, copy=True, ensure_2d=False)
        if n_bins.ndim > 1 or n_bins.shape[0] != n_features:
            raise InvalidBinCountError("n_bins must be a scalar or array of shape (n_features,).")
        return np.array([check_n_bins(b.item() if hasattr(b, 'item') else b) for b in n_bins], dtype=int)

    def _validate_dcols(self, X):
        """
        Check if dcols argument is valid.
        """
        check_columns(X, self.dcols_, arg_name='dcols')
        for col in self.dcols_:
            if not is_numeric_dtype(X[col].dtype):
                raise ValueError("Cannot discretize non-numeric column {}.".format(col))

    def fit(self, X, y=None):
        """
        Fit the estimator.

        Parameters
        ----------
        X : data frame of shape (n_samples, n_features)
            (Training) data to be discretized.

        y : Ignored. This parameter exists only for compatibility with
            :class:`~sklearn.pipeline.Pipeline` and fit_transform method

        Returns
        -------
        self
        """
        X = check_table(X)

        # by default, discretize all numeric columns
        if len(self.dcols) == 0:
            self.dcols_ = [col for col in X.columns if is_numeric_dtype(X[col].dtype)]
        else:
            self.dcols_ = list(self.dcols)
        self._validate_dcols(X)
        self.n_bins_ = self._validate_n_bins()

        self.bin_edges_ = dict()
        for col, b in zip(self.dcols_, self.n_bins_):
            self.bin_edges_[col] = quantile_bin_edges(X[col], n_bins=int(b), name=str(col))
        return self

    def transform(self, X):
        """
        Discretize the data.

        Parameters
        ----------
        X : data frame of shape (n_samples, n_features)
            Data to be discretized.

        Returns
        -------
        X_discretized : data frame
            New data frame with columns in dcols_ replaced by their
            bin ids. All other features remain unchanged. Row index
            and column order follow X.
        """
        check_is_fitted(self)
        index = X.index if isinstance(X, pd.DataFrame) else None
        X_discretized = check_table(X)
        check_columns(X_discretized, self.dcols_, arg_name='dcols')
        for col in self.dcols_:
            X_discretized[col] = discretize_to_bins(X_discretized[col], self.bin_edges_[col], name=str(col))
        if index is not None:
            X_discretized.index = index
        return X_discretized
