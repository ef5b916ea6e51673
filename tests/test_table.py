import numpy as np
import pandas as pd
import pytest

from ratingindex.data import RawTable


def test_raw_table_from_arrays():
    table = RawTable.from_arrays([1, 2, 1], [10, 10, 20], [4.0, 2.0, 3.0])

    assert len(table) == 3
    assert table.get(1) == (2, 10, 2.0)
    assert list(table) == [(1, 10, 4.0), (2, 10, 2.0), (1, 20, 3.0)]
    assert table.mean() == pytest.approx(3.0)


def test_raw_table_is_read_only():
    table = RawTable.from_arrays([1], [2], [3.0])

    with pytest.raises(ValueError):
        table.ratings[0] = 5.0


def test_raw_table_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        RawTable.from_arrays([1, 2], [1], [1.0, 2.0])


def test_raw_table_get_out_of_range():
    table = RawTable.from_arrays([1], [2], [3.0])

    with pytest.raises(IndexError):
        table.get(1)
    with pytest.raises(IndexError):
        table.get(-1)


def test_empty_table_mean_is_zero():
    table = RawTable.empty()

    assert len(table) == 0
    assert table.mean() == 0.0
    assert table.users.dtype == np.int64


def test_raw_table_from_frame():
    frame = pd.DataFrame({"uid": [5, 6], "iid": [7, 8], "score": [1.5, 2.5]})

    table = RawTable.from_frame(frame, user_col="uid", item_col="iid", rating_col="score")

    assert table.get(0) == (5, 7, 1.5)
    with pytest.raises(ValueError):
        RawTable.from_frame(frame)
