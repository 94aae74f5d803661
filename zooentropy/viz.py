import matplotlib.pyplot as plt
import pandas as pd


def plot_ranking(ranking, value='information_gain', top_k=None, ax=None, filename=None, dpi=150):
    """Horizontal bar chart of a predictor ranking, most informative at the top.

    Parameters
    ----------
    ranking : data frame with a 'predictor' column (e.g. InformationGainRanker.ranking_),
        list of InformationGainRecord, or Series of column entropies
    value : str
        Column to plot, e.g. 'information_gain', 'conditional_entropy' or 'gain_ratio'.
    """
    if isinstance(ranking, pd.Series):
        ranking = pd.DataFrame({'predictor': ranking.index, value: ranking.values})
    elif not isinstance(ranking, pd.DataFrame):
        ranking = pd.DataFrame([r._asdict() for r in ranking])
    if top_k is not None:
        ranking = ranking.head(top_k)

    if ax is None:
        fig, ax = plt.subplots(dpi=dpi)
    ax.barh(ranking['predictor'].astype(str)[::-1], ranking[value][::-1])
    ax.set_xlabel(value.replace('_', ' ') + ' (bits)' if value != 'gain_ratio' else 'gain ratio')
    if filename is not None:
        ax.figure.savefig(filename)
    return ax
