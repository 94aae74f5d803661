"""
Quantile discretization of continuous variables into ordinal classes
"""

from .quantile import QuantileDiscretizer, quantile_discretize, quantile_bin_edges, discretize_to_bins, \
    check_n_bins, DEFAULT_N_BINS
