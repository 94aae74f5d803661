import logging
import os.path
from os.path import join as oj

import pandas as pd
import requests

from zooentropy.util.arguments import check_columns, CATEGORICAL, CONTINUOUS
from zooentropy.util.errors import DataDownloadError, EmptyInputError

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = os.path.expanduser("~/cache_zooentropy_data")

# C4.5-style files mark unknown values with '?'
DEFAULT_NA_VALUES = ('?',)


def load_table(
    source: str,
    data_path: str = DEFAULT_DATA_PATH,
    override_cache: bool = False,
    rename: dict = None,
    na_values=DEFAULT_NA_VALUES,
    verbose: bool = False,
    **read_csv_kwargs,
) -> pd.DataFrame:
    """Load a table of specimens (rows) by variables (columns) from a csv file or an http(s) url.
    Remote files are downloaded once and cached under data_path.

    Parameters
    ----------
    source: str
        local path or http(s) url of a csv file with a header row
    data_path: str
        directory used to cache downloaded files (default: '~/cache_zooentropy_data')
    override_cache: bool, False
        if True, will download the file again even if it is cached
    rename: dict, optional
        maps raw column names to clean ones (e.g. {'Bd': 'distal_breadth'})
    na_values: sequence of str
        extra strings to read as missing values, on top of pandas' defaults
    read_csv_kwargs:
        passed through to pandas.read_csv

    Returns
    -------
    df: pd.DataFrame
        table with cleaned column names

    Example
    -------
    ```
    df = load_table('elk_measurements.csv', rename={'GL': 'greatest_length'})
    ```
    """
    if source.startswith("http://") or source.startswith("https://"):
        fname = oj(data_path, "tables", _cache_name(source))
        if not os.path.isfile(fname) or override_cache:
            _download_table(source, fname)
        elif verbose:
            print(f"loading {source} from cache {fname}")
        source = fname

    df = pd.read_csv(source, na_values=list(na_values), **read_csv_kwargs)
    if df.shape[0] == 0:
        raise EmptyInputError(f"{source} has no rows")
    df.columns = _clean_col_names(df.columns)
    if rename is not None:
        check_columns(df, rename.keys(), arg_name='rename')
        df = df.rename(columns=rename)
    logger.debug("loaded %d rows x %d columns from %s", df.shape[0], df.shape[1], source)
    return df


def variable_types(X: pd.DataFrame, continuous_cols=()) -> dict:
    """Column name -> 'continuous' or 'categorical' for every column of X.
    Types come from the caller; nothing is inferred from the values.
    """
    continuous_cols = check_columns(X, continuous_cols)
    return {col: CONTINUOUS if col in continuous_cols else CATEGORICAL for col in X.columns}


def _cache_name(url: str) -> str:
    # drop query string, keep the file name
    fname = url.split("?")[0].rstrip("/").split("/")[-1]
    if not fname.endswith(".csv"):
        fname = fname + ".csv"
    return fname


def _clean_col_names(col_names):
    # strip whitespace and collapse inner spaces so names can be used as attributes
    return ["_".join(str(col).strip().split()) for col in col_names]


def _download_table(url: str, fname: str):
    r = requests.get(url)
    if r.status_code != 200:
        raise DataDownloadError(f"{r.status_code} Error for table {url}")
    os.makedirs(os.path.dirname(fname), exist_ok=True)
    with open(fname, "w") as f:
        f.write(r.text)
    logger.info("downloaded %s to %s", url, fname)

