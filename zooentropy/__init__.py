"""
.. include:: ../readme.md
"""
# Python `zooentropy` package for ranking morphological variables by Shannon entropy and information gain.

from .discretization.quantile import QuantileDiscretizer, quantile_discretize, quantile_bin_edges, DEFAULT_N_BINS
from .ranking.information_gain import InformationGainRanker, InformationGainRecord, rank_predictors, \
    column_entropies, overall_entropy, conditional_entropy, information_gain, gain_ratio
from .util.data_util import load_table, variable_types
from .util.errors import ZooEntropyError, EmptyInputError, InsufficientDataError, InvalidBinCountError, \
    DataDownloadError
from .util.metrics import entropy, probability_distribution, max_entropy
from .viz import plot_ranking
