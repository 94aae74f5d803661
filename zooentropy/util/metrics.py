import numpy as np
import pandas as pd
from scipy.stats import entropy as scipy_entropy

from zooentropy.util.arguments import check_sequence
from zooentropy.util.errors import InsufficientDataError


def probability_distribution(x, name='x') -> pd.Series:
    """Empirical probability of each distinct label in x.

    Missing labels (None / NaN) are not a category and are dropped before
    counting. Labels are returned in order of first appearance.

    Parameters
    ----------
    x : array-like of shape (n_samples,)
        Categorical sequence.

    name : str
        Used in error messages.

    Returns
    -------
    p : Series indexed by label, values sum to 1
    """
    x = check_sequence(x, name=name)
    counts = x.value_counts(dropna=True, sort=False)
    # category dtypes also list unobserved categories
    counts = counts[counts > 0]
    if counts.sum() == 0:
        raise InsufficientDataError("{} has no non-missing observations".format(name))
    return counts / counts.sum()


def entropy(x, base=2, name='x') -> float:
    """Shannon entropy of a categorical sequence (in bits by default).

    Zero-probability labels contribute nothing. The result lies in
    [0, log_base(number of distinct labels)] and is 0 iff x holds a single
    distinct label.
    """
    p = probability_distribution(x, name=name)
    return float(scipy_entropy(p.to_numpy(dtype=float), base=base))


def max_entropy(x, base=2, name='x') -> float:
    """Upper bound on entropy(x): log_base of the number of distinct labels.
    """
    n_labels = len(probability_distribution(x, name=name))
    return float(np.log(n_labels) / np.log(base))
