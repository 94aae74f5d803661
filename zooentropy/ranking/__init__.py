"""
Entropy-based ranking of predictor variables
"""

from .information_gain import InformationGainRanker, InformationGainRecord, rank_predictors, column_entropies, \
    overall_entropy, conditional_entropy, information_gain, gain_ratio
