'''Rank predictor variables by how much they reduce uncertainty about a target.

For a categorical target T and a predictor X (binned first when continuous),

    H(T | X) = sum_v  n_v / N * H(T | X = v)
    IG(T; X) = H(T) - H(T | X)

The most informative predictor has the highest information gain, or
equivalently the lowest conditional entropy.
'''
import logging
from collections import namedtuple

import pandas as pd
from scipy.stats import entropy as scipy_entropy
from sklearn.base import BaseEstimator
from sklearn.utils.validation import check_is_fitted
from tqdm import tqdm

from zooentropy.discretization.quantile import quantile_discretize, check_n_bins, DEFAULT_N_BINS
from zooentropy.util.arguments import check_sequence, check_table, check_variable_type, \
    CATEGORICAL, CONTINUOUS
from zooentropy.util.data_util import variable_types
from zooentropy.util.errors import InsufficientDataError
from zooentropy.util.metrics import entropy

logger = logging.getLogger(__name__)

InformationGainRecord = namedtuple('InformationGainRecord', 'predictor conditional_entropy information_gain')

RANKING_COLUMNS = ['predictor', 'conditional_entropy', 'information_gain', 'gain_ratio']


def overall_entropy(target) -> float:
    """Entropy of the full target sequence.
    """
    return entropy(target, name='target')


def _partition_pairs(target, predictor, predictor_type=CATEGORICAL, n_bins=DEFAULT_N_BINS):
    """Bin the predictor if needed and keep the rows where the target is observed.

    Rows with a missing predictor stay in, and later form their own
    partition, so every predictor is scored against the same rows.
    """
    target = check_sequence(target, name='target')
    predictor = check_sequence(predictor, name='predictor')
    if len(target) != len(predictor):
        raise ValueError("target and predictor should have the same length, got {} and {}".format(
            len(target), len(predictor)))
    if check_variable_type(predictor_type) == CONTINUOUS:
        predictor = quantile_discretize(predictor, n_bins=n_bins, name='predictor')

    if not predictor.notna().any():
        raise InsufficientDataError("predictor has no non-missing values")
    observed = target.notna().to_numpy()
    if not observed.any():
        raise InsufficientDataError("target has no non-missing values")
    return target[observed], predictor[observed]


def _conditional_entropy(target, predictor):
    n = len(target)
    h = 0.0
    # dropna=False: rows with no predictor value form one extra partition
    for _, subset in target.groupby(predictor, sort=False, observed=True, dropna=False):
        if len(subset) == 0:
            continue
        h += len(subset) / n * entropy(subset, name='target')
    return h


def _split_entropy(predictor):
    # entropy of the partition sizes, counting the missing partition
    counts = predictor.value_counts(dropna=False)
    return float(scipy_entropy(counts[counts > 0].to_numpy(dtype=float), base=2))


def conditional_entropy(target, predictor, predictor_type=CATEGORICAL, n_bins=DEFAULT_N_BINS) -> float:
    """Weighted average entropy of the target within each partition induced by the predictor.

    Parameters
    ----------
    target : array-like of shape (n_samples,)
        Categorical target (e.g. species or age group).

    predictor : array-like of shape (n_samples,)
        Predictor values, positionally aligned with target.

    predictor_type : {'categorical', 'continuous'}, default='categorical'
        Continuous predictors are quantile-binned into n_bins classes
        before partitioning.

    n_bins : int, default=6
        Number of quantile bins for continuous predictors.

    Returns
    -------
    Conditional entropy in bits, over the rows where the target is
    observed. Rows where the predictor is missing count as one more
    partition.
    """
    target, predictor = _partition_pairs(target, predictor, predictor_type=predictor_type, n_bins=n_bins)
    return _conditional_entropy(target, predictor)


def _information_gain_components(target, predictor):
    h_target = entropy(target, name='target')
    h_conditional = _conditional_entropy(target, predictor)
    return h_target, h_conditional


def information_gain(target, predictor, predictor_type=CATEGORICAL, n_bins=DEFAULT_N_BINS) -> float:
    """Reduction in target entropy from knowing the predictor.

    overall_entropy(target) == conditional_entropy + information_gain, and
    the result is >= 0 up to floating point rounding.
    """
    target, predictor = _partition_pairs(target, predictor, predictor_type=predictor_type, n_bins=n_bins)
    h_target, h_conditional = _information_gain_components(target, predictor)
    return h_target - h_conditional


def gain_ratio(target, predictor, predictor_type=CATEGORICAL, n_bins=DEFAULT_N_BINS) -> float:
    """Information gain normalized by the entropy of the predictor's partition (C4.5 split criterion).
    Returns 0 for a constant predictor.
    """
    target, predictor = _partition_pairs(target, predictor, predictor_type=predictor_type, n_bins=n_bins)
    h_target, h_conditional = _information_gain_components(target, predictor)
    h_split = _split_entropy(predictor)
    if h_split == 0:
        return 0.0
    return (h_target - h_conditional) / h_split


def _score_predictor(target, predictor, predictor_type, n_bins, name):
    target, predictor = _partition_pairs(target, predictor, predictor_type=predictor_type, n_bins=n_bins)
    h_target, h_conditional = _information_gain_components(target, predictor)
    h_split = _split_entropy(predictor)
    gain = h_target - h_conditional
    ratio = 0.0 if h_split == 0 else gain / h_split
    return InformationGainRecord(name, h_conditional, gain), ratio


def _sort_records(records):
    # python's sort is stable, so ties keep input order; rounding stops float noise from breaking ties
    return sorted(records, key=lambda r: round(r[0].information_gain, 12), reverse=True)


def rank_predictors(X, y, continuous_cols=(), n_bins=DEFAULT_N_BINS, skip_errors=False, verbose=False):
    """Information gain of every column of X about target y, sorted descending.

    Parameters
    ----------
    X : data frame or mapping of column name to sequence
        Candidate predictors, one row per specimen.

    y : array-like of shape (n_samples,)
        Categorical target.

    continuous_cols : list of strings
        Columns of X to quantile-bin before partitioning; all other
        columns are treated as categorical.

    n_bins : int, default=6
        Number of quantile bins for continuous columns.

    skip_errors : bool, default=False
        If True, columns without usable data are logged and left out of
        the ranking instead of raising InsufficientDataError.

    Returns
    -------
    list of InformationGainRecord, most informative first
    """
    ranker = InformationGainRanker(n_bins=n_bins, continuous_cols=continuous_cols,
                                   skip_errors=skip_errors, verbose=verbose)
    return list(ranker.fit(X, y).records_)


def column_entropies(X, continuous_cols=(), n_bins=DEFAULT_N_BINS, skip_errors=False) -> pd.Series:
    """Unconditional entropy of every column of X, highest first (ties keep column order).

    Continuous columns are quantile-binned into n_bins classes first.
    """
    X = check_table(X)
    n_bins = check_n_bins(n_bins)
    types = variable_types(X, continuous_cols)
    entropies = {}
    for col in X.columns:
        x = X[col]
        try:
            if types[col] == CONTINUOUS:
                x = quantile_discretize(x, n_bins=n_bins, name=str(col))
            entropies[col] = entropy(x, name=str(col))
        except InsufficientDataError as e:
            if not skip_errors:
                raise
            logger.warning("skipping column %s: %s", col, e)
    entropies = pd.Series(entropies, dtype=float, name='entropy')
    return entropies.sort_values(ascending=False, kind='mergesort')


class InformationGainRanker(BaseEstimator):
    """Rank candidate predictors by information gain about a categorical target.

    Params
    ------
    n_bins : int, default=6
        Number of quantile bins for continuous predictors.

    continuous_cols : list of strings
        Names of the columns to treat as continuous; every other column
        is treated as categorical.

    skip_errors : bool, default=False
        Log and skip predictors with no usable data instead of raising.

    verbose : bool, default=False
        Show a progress bar over predictors.

    Attributes
    ----------
    overall_entropy_ : float
        Entropy of the target.

    records_ : tuple of InformationGainRecord
        One record per scored predictor, most informative first.

    ranking_ : data frame
        Same ranking as records_ with an extra gain_ratio column.

    most_informative_ : str
        Top predictor of the ranking (None if every predictor was skipped).

    skipped_ : list of strings
        Predictors left out because of InsufficientDataError.
    """

    def __init__(self, n_bins=DEFAULT_N_BINS, continuous_cols=[], skip_errors=False, verbose=False):
        self.n_bins = n_bins
        self.continuous_cols = continuous_cols
        self.skip_errors = skip_errors
        self.verbose = verbose

    def fit(self, X, y):
        """Score every column of X against y.

        Parameters
        ----------
        X : data frame or mapping of column name to sequence
            Candidate predictors.

        y : array-like of shape (n_samples,) or str
            Categorical target, or the name of the target column in X
            (which is then excluded from the candidates).

        Returns
        -------
        self
        """
        X = check_table(X)
        if isinstance(y, str) and y in X.columns:
            X, y = X.drop(columns=[y]), X[y]
        y = check_sequence(y, name='target')
        if len(y) != X.shape[0]:
            raise ValueError("X and y should have the same number of rows, got {} and {}".format(
                X.shape[0], len(y)))
        n_bins = check_n_bins(self.n_bins)
        types = variable_types(X, self.continuous_cols)

        self.overall_entropy_ = overall_entropy(y)
        self.feature_names_ = list(X.columns)
        self.skipped_ = []
        scored = []
        for col in tqdm(X.columns, disable=not self.verbose):
            try:
                scored.append(_score_predictor(y, X[col], types[col], n_bins, col))
            except InsufficientDataError as e:
                if not self.skip_errors:
                    raise
                logger.warning("skipping predictor %s: %s", col, e)
                self.skipped_.append(col)
                continue
            logger.debug("%s: conditional entropy %0.4f, information gain %0.4f",
                         col, scored[-1][0].conditional_entropy, scored[-1][0].information_gain)

        scored = _sort_records(scored)
        self.records_ = tuple(record for record, _ in scored)
        self.ranking_ = pd.DataFrame([(*record, ratio) for record, ratio in scored],
                                     columns=RANKING_COLUMNS)
        self.most_informative_ = self.records_[0].predictor if len(self.records_) > 0 else None
        return self

    def __str__(self):
        if not hasattr(self, 'records_'):
            return self.__class__.__name__ + '(unfitted)'
        s = '> ------------------------------\n'
        s += '> Information gain ranking (target entropy {:0.3f} bits)\n'.format(self.overall_entropy_)
        s += '> ------------------------------\n'
        for i, record in enumerate(self.records_):
            s += '{:>3}. {}: H(T|X)={:0.3f}, IG={:0.3f}\n'.format(
                i + 1, record.predictor, record.conditional_entropy, record.information_gain)
        return s

    def get_ranking(self, top_k=None):
        """Ranking table, optionally limited to the top_k predictors.
        """
        check_is_fitted(self)
        if top_k is None:
            return self.ranking_.copy()
        return self.ranking_.head(max(int(top_k), 0)).copy()
