import pickle

import pyarrow as pa

from splitstats.common.size import estimate_size


def test_column_batch():
    batch = {"x": [1, 2, 3], "y": [1.0, 2.0, 3.0]}
    assert estimate_size(batch) == float(pa.table(batch).nbytes)


def test_arrow_table():
    table = pa.table({"x": list(range(100))})
    assert estimate_size(table) == float(table.nbytes)


def test_larger_batches_are_larger():
    small = estimate_size({"x": list(range(10))})
    large = estimate_size({"x": list(range(1000))})
    assert large > small


def test_arbitrary_objects():
    value = ["some", "opaque", {"payload": 1}]
    assert estimate_size(value) == float(len(pickle.dumps(value)))
    # ragged mappings are not column batches
    ragged = {"a": [1, 2], "b": [1]}
    assert estimate_size(ragged) == float(len(pickle.dumps(ragged)))
