import os

import numpy as np
import pytest

import zooentropy
from zooentropy.util import data_util
from zooentropy.util.errors import DataDownloadError, EmptyInputError

ELK_CSV = """specimen, GL ,distal breadth,age group
E1,250.5,44.1,juvenile
E2,?,45.0,juvenile
E3,301.2,52.3,adult
E4,305.9,?,adult
"""


class _Response:
    def __init__(self, status_code, text=''):
        self.status_code = status_code
        self.text = text


def test_load_local_table(tmp_path):
    fname = tmp_path / 'elk.csv'
    fname.write_text(ELK_CSV)
    df = zooentropy.load_table(str(fname))
    assert list(df.columns) == ['specimen', 'GL', 'distal_breadth', 'age_group']
    assert df.shape == (4, 4)
    assert np.isnan(df['GL'][1])
    assert np.isnan(df['distal_breadth'][3])


def test_rename(tmp_path):
    fname = tmp_path / 'elk.csv'
    fname.write_text(ELK_CSV)
    df = zooentropy.load_table(str(fname), rename={'GL': 'greatest_length'})
    assert 'greatest_length' in df.columns
    with pytest.raises(ValueError):
        zooentropy.load_table(str(fname), rename={'Dd': 'depth'})


def test_empty_table(tmp_path):
    fname = tmp_path / 'empty.csv'
    fname.write_text('GL,age_group\n')
    with pytest.raises(EmptyInputError):
        zooentropy.load_table(str(fname))


def test_download_is_cached(tmp_path, monkeypatch):
    calls = []

    def fake_get(url):
        calls.append(url)
        return _Response(200, ELK_CSV)

    monkeypatch.setattr(data_util.requests, 'get', fake_get)
    url = 'https://example.org/data/elk?raw=true'
    df = zooentropy.load_table(url, data_path=str(tmp_path))
    assert df.shape == (4, 4)
    assert os.path.isfile(os.path.join(str(tmp_path), 'tables', 'elk.csv'))

    zooentropy.load_table(url, data_path=str(tmp_path))
    assert len(calls) == 1
    zooentropy.load_table(url, data_path=str(tmp_path), override_cache=True)
    assert len(calls) == 2


def test_download_error(tmp_path, monkeypatch):
    monkeypatch.setattr(data_util.requests, 'get', lambda url: _Response(404))
    with pytest.raises(DataDownloadError):
        zooentropy.load_table('https://example.org/missing.csv', data_path=str(tmp_path))


def test_variable_types(tmp_path):
    fname = tmp_path / 'elk.csv'
    fname.write_text(ELK_CSV)
    df = zooentropy.load_table(str(fname))
    types = zooentropy.variable_types(df, continuous_cols=['GL', 'distal_breadth'])
    assert types == {'specimen': 'categorical', 'GL': 'continuous',
                     'distal_breadth': 'continuous', 'age_group': 'categorical'}
    with pytest.raises(ValueError):
        zooentropy.variable_types(df, continuous_cols=['Dd'])


def test_loaded_table_ranking(tmp_path):
    fname = tmp_path / 'elk.csv'
    fname.write_text(ELK_CSV)
    df = zooentropy.load_table(str(fname)).drop(columns='specimen')
    ranker = zooentropy.InformationGainRanker(n_bins=2, continuous_cols=['GL', 'distal_breadth'])
    ranker.fit(df, 'age_group')
    # 301.2 (an adult) is the median of GL, so it shares the lower bin with the juvenile
    assert ranker.most_informative_ == 'distal_breadth'
    assert ranker.records_[0].conditional_entropy == 0.0
