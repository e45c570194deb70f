"""Restartable transaction sources.

The miner traverses its input once per level, so every source must hand out
a fresh, independent iterator each time ``iter()`` is called on it.  One-shot
iterators such as generator objects are rejected.
"""

from __future__ import annotations

import logging
import os
import time
import warnings
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Any

import numpy as np

from ._dependencies import import_optional_dependency
from ._validation import ensure_not_none, valid_one_hot_check
from .itemset import Item

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl

logger = logging.getLogger(__name__)

Transaction = Sequence[Item]


class TransactionSource(ABC):
    """A re-iterable collection of transactions."""

    @abstractmethod
    def __iter__(self) -> Iterator[Transaction]: ...


class ListSource(TransactionSource):
    """Transactions held in memory.

    Parameters
    ----------
    transactions:
        An iterable of transactions, each an iterable of hashable items.
        It is materialised once on construction.
    """

    def __init__(self, transactions: Iterable[Iterable[Item]]) -> None:
        ensure_not_none(transactions, "transactions")
        self._transactions: tuple[tuple[Item, ...], ...] = tuple(tuple(txn) for txn in transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __repr__(self) -> str:
        return f"ListSource(n_transactions={len(self._transactions)})"


class _IterableSource(TransactionSource):
    def __init__(self, iterable: Iterable[Iterable[Item]]) -> None:
        self._iterable = iterable

    def __iter__(self) -> Iterator[Transaction]:
        for txn in self._iterable:
            yield tuple(txn)


class FileSource(TransactionSource):
    """Transactions read from a text file, one transaction per line.

    Items are separated by *delimiter* (any whitespace by default).  Blank
    lines and lines starting with ``#`` are skipped.  The file is re-opened on
    every traversal unless *cache* is set, in which case the first complete
    traversal is kept in memory.  ``OSError`` raised while reading propagates
    unchanged.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        cache: bool = False,
        delimiter: str | None = None,
        encoding: str = "utf-8",
    ) -> None:
        ensure_not_none(path, "path")
        self.path = os.fspath(path)
        self.cache = cache
        self.delimiter = delimiter
        self.encoding = encoding
        self._cached: tuple[tuple[str, ...], ...] | None = None

    def _read(self) -> Iterator[tuple[str, ...]]:
        with open(self.path, encoding=self.encoding) as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                yield tuple(token for token in line.split(self.delimiter) if token)

    def __iter__(self) -> Iterator[Transaction]:
        if self._cached is not None:
            yield from self._cached
            return

        if not self.cache:
            yield from self._read()
            return

        transactions = []
        for txn in self._read():
            transactions.append(txn)
            yield txn
        self._cached = tuple(transactions)
        logger.debug("Cached %d transactions from %s", len(transactions), self.path)

    def __repr__(self) -> str:
        return f"FileSource({self.path!r}, cache={self.cache})"


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def from_transactions(transactions: Iterable[Iterable[Item]]) -> ListSource:
    """Wrap a list of lists such as ``[["bread", "milk"], ["bread", "eggs"]]``."""
    if isinstance(transactions, Iterator):
        raise TypeError(
            "Transactions must be re-iterable; got a one-shot iterator. Materialise it first, e.g. with list()."
        )
    return ListSource(transactions)


def _group_long_format(txn_ids: list[Any], items: list[Any], verbose: int = 0) -> ListSource:
    t0 = time.perf_counter()
    groups: dict[Any, list[Any]] = {}

    for txn_id, item in zip(txn_ids, items):
        groups.setdefault(txn_id, []).append(item)

    if verbose:
        print(
            f"[{time.strftime('%X')}] Grouped {len(items):,} rows into {len(groups):,} transactions "
            f"in {time.perf_counter() - t0:.2f}s."
        )
    logger.debug("Grouped %d rows into %d transactions", len(items), len(groups))
    return ListSource(groups.values())


def _resolve_columns(columns: list[Any], transaction_col: str | None, item_col: str | None) -> tuple[Any, Any]:
    if len(columns) < 2:
        raise ValueError(
            f"DataFrame must have at least 2 columns (transaction id + item), got {len(columns)}: {columns}"
        )

    txn_col = transaction_col if transaction_col is not None else columns[0]
    itm_col = item_col if item_col is not None else columns[1]

    if len(columns) > 2 and transaction_col is None and item_col is None:
        warnings.warn(
            f"DataFrame has {len(columns)} columns; using '{txn_col}' as transaction id and '{itm_col}' as item. "
            "Pass `transaction_col` and `item_col` to silence this warning.",
            stacklevel=3,
        )

    if txn_col not in columns:
        raise ValueError(f"Transaction column '{txn_col}' not found. Available columns: {columns}")
    if itm_col not in columns:
        raise ValueError(f"Item column '{itm_col}' not found. Available columns: {columns}")

    return txn_col, itm_col


def from_pandas(
    df: pd.DataFrame,
    transaction_col: str | None = None,
    item_col: str | None = None,
    verbose: int = 0,
) -> ListSource:
    """Group a long-format pandas DataFrame into transactions.

    Parameters
    ----------
    df
        A DataFrame with (at least) one column identifying the transaction and
        one holding the item.  Rows with a missing id or item are ignored.
    transaction_col
        Name of the transaction-id column.  Defaults to the first column.
    item_col
        Name of the item column.  Defaults to the second column.
    verbose
        Print progress when > 0.

    Examples
    --------
    >>> df = pd.DataFrame({"order_id": [1, 1, 2], "item": ["milk", "bread", "milk"]})
    >>> source = from_pandas(df)
    >>> len(source)
    2
    """
    txn_col, itm_col = _resolve_columns(list(df.columns), transaction_col, item_col)
    df = df.loc[df[txn_col].notna() & df[itm_col].notna()]
    return _group_long_format(df[txn_col].tolist(), df[itm_col].tolist(), verbose=verbose)


def from_polars(
    df: pl.DataFrame,
    transaction_col: str | None = None,
    item_col: str | None = None,
    verbose: int = 0,
) -> ListSource:
    """Polars counterpart of :func:`from_pandas`."""
    txn_col, itm_col = _resolve_columns(list(df.columns), transaction_col, item_col)
    df = df.drop_nulls([txn_col, itm_col])
    return _group_long_format(df.get_column(txn_col).to_list(), df.get_column(itm_col).to_list(), verbose=verbose)


def from_one_hot(data: Any, columns: Sequence[Item] | None = None) -> ListSource:
    """Turn a one-hot encoded matrix into transactions.

    Each row becomes one transaction holding the column labels of its
    ``True``/``1`` cells.

    Parameters
    ----------
    data
        A pandas or polars DataFrame, or a 2-D numpy array.  Allowed values
        are 0/1 or True/False.
    columns
        Item labels for the columns.  Defaults to the DataFrame's column
        names, or to ``0..n-1`` for arrays.
    """
    ensure_not_none(data, "data")

    if hasattr(data, "sparse") and hasattr(data.sparse, "to_dense"):
        data = data.sparse.to_dense()

    if hasattr(data, "columns"):
        labels = list(data.columns) if columns is None else list(columns)
        values = np.asarray(data.to_numpy())
    else:
        values = np.asarray(data)
        labels = list(range(values.shape[1] if values.ndim == 2 else 0)) if columns is None else list(columns)

    valid_one_hot_check(values)

    if len(labels) != values.shape[1]:
        raise ValueError(f"Got {len(labels)} column labels for a matrix with {values.shape[1]} columns")

    return ListSource([labels[j] for j in np.flatnonzero(row)] for row in values)


def read_transactions(
    path: str | os.PathLike[str],
    cache: bool = False,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> FileSource:
    """Open a transaction file, one whitespace-separated transaction per line.

    Example file::

        # weekday purchases
        milk sugar coffee
        coffee milk sugar bread
    """
    return FileSource(path, cache=cache, delimiter=delimiter, encoding=encoding)


def _is_polars(data: Any) -> bool:
    _type = type(data)
    return _type.__name__ == "DataFrame" and (getattr(_type, "__module__", "") or "").startswith("polars")


def _is_pandas(data: Any) -> bool:
    _type = type(data)
    return _type.__name__ == "DataFrame" and (getattr(_type, "__module__", "") or "").startswith("pandas")


def as_source(data: Any) -> TransactionSource:
    """Coerce *data* into a :class:`TransactionSource`.

    Accepted inputs:

    - a :class:`TransactionSource` (returned unchanged),
    - a pandas or polars DataFrame: boolean frames are read as one-hot
      matrices, anything else as long format (transaction id, item),
    - a path (``str`` or ``os.PathLike``) to a transaction file,
    - any re-iterable of transactions, e.g. a list of lists.

    Raises
    ------
    ValueError
        If *data* is ``None``.
    TypeError
        If *data* is a one-shot iterator or not iterable at all.
    """
    ensure_not_none(data, "source")

    if isinstance(data, TransactionSource):
        return data

    if _is_pandas(data):
        import pandas as pd

        if len(data.columns) > 0 and all(pd.api.types.is_bool_dtype(dtype) for dtype in data.dtypes):
            return from_one_hot(data)
        return from_pandas(data)

    if _is_polars(data):
        pl = import_optional_dependency("polars")

        if len(data.columns) > 0 and all(dtype == pl.Boolean for dtype in data.dtypes):
            return from_one_hot(data)
        return from_polars(data)

    if isinstance(data, (str, os.PathLike)):
        return read_transactions(data)

    if isinstance(data, Iterator):
        raise TypeError(
            f"A transaction source must be re-iterable; got a one-shot {type(data).__name__}. "
            "Materialise it first, e.g. with list()."
        )

    if isinstance(data, Collection):
        return ListSource(data)

    if isinstance(data, Iterable):
        return _IterableSource(data)

    raise TypeError(f"Expected a TransactionSource, DataFrame, path or iterable of transactions, got {type(data)}")