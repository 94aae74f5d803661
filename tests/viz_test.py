import matplotlib

matplotlib.use('Agg')

import pandas as pd

from zooentropy import InformationGainRanker, column_entropies, plot_ranking


def setup_ranker():
    X = pd.DataFrame({'noise': [1, 2, 1, 2], 'perfect': [1, 1, 2, 2]})
    return InformationGainRanker().fit(X, ['juvenile', 'juvenile', 'adult', 'adult']), X


def test_plot_ranking(tmp_path):
    ranker, X = setup_ranker()
    ax = plot_ranking(ranker.ranking_)
    assert len(ax.patches) == 2

    ax = plot_ranking(ranker.records_, value='conditional_entropy', top_k=1)
    assert len(ax.patches) == 1

    fname = tmp_path / 'ranking.png'
    plot_ranking(column_entropies(X), value='entropy', filename=str(fname))
    assert fname.exists()


def test_plot_ranking_saves_figure_of_given_ax(tmp_path):
    import matplotlib.pyplot as plt

    ranker, _ = setup_ranker()
    fig, ax = plt.subplots()
    other_fig = plt.figure()  # becomes the current figure
    fname = tmp_path / 'ranking.png'
    plot_ranking(ranker.ranking_, ax=ax, filename=str(fname))
    assert fname.exists()
    assert len(ax.patches) == 2
    assert len(other_fig.axes) == 0
