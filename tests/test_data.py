import h5py
import numpy as np
import pytest

from h5nav.data import read, read_array
from h5nav.datatypes import datatype_of
from h5nav.errors import Unsupported
from h5nav.files import open_file
from h5nav.navigator import open_attribute, open_position


def decoded(values):
    return [v.decode("utf-8") if isinstance(v, bytes) else v for v in values]


PAYLOADS = {
    "integer": np.array([-3, 0, 7, 2**40], dtype="int64"),
    "float": np.array([[0.5, -1.25], [3.0, 1e10]], dtype="float32"),
    "fixed_string": np.array([b"abc", b"de", b""], dtype="S3"),
}


@pytest.fixture
def payload_file(tmp_h5_path):
    with h5py.File(tmp_h5_path, "w", track_order=True) as f:
        for name, data in PAYLOADS.items():
            f.create_dataset(name, data=data, track_order=True)
            f.attrs[name] = data
        f.create_dataset(
            "vlen_string", data=["hello", "grüße", ""], dtype=h5py.string_dtype()
        )
        f.attrs["vlen_string"] = ["hello", "grüße", ""]
    return tmp_h5_path


@pytest.mark.parametrize("name", PAYLOADS.keys())
def test_read_dataset_with_stored_type(payload_file, name):
    expected = PAYLOADS[name]
    pos = sorted(list(PAYLOADS) + ["vlen_string"]).index(name)
    with open_file(payload_file) as root, open_position(root, [pos]) as ds:
        out = np.zeros_like(expected)
        with datatype_of(ds) as t:
            read(ds, t, out)
        assert out.tobytes() == expected.tobytes()
        np.testing.assert_array_equal(read_array(ds), expected)


@pytest.mark.parametrize("name", PAYLOADS.keys())
def test_read_attribute_with_stored_type(payload_file, name):
    expected = PAYLOADS[name]
    with open_file(payload_file) as root:
        with open_attribute(root, list(PAYLOADS).index(name)) as attr:
            out = np.zeros_like(expected)
            with datatype_of(attr) as t:
                read(attr, t, out)
            assert out.tobytes() == expected.tobytes()


def test_read_variable_length_strings(payload_file):
    with open_file(payload_file) as root:
        with open_position(root, [3]) as ds:
            assert decoded(read_array(ds).tolist()) == ["hello", "grüße", ""]
        with open_attribute(root, 3) as attr:
            assert decoded(read_array(attr).tolist()) == ["hello", "grüße", ""]


def test_read_scalar_string_attribute(simple_root):
    with open_position(simple_root, [0]) as x, open_attribute(x, 0) as units:
        arr = read_array(units)
        assert arr.shape == ()
        assert decoded([arr[()]]) == ["m"]


def test_read_container_unsupported(sample_root):
    with open_position(sample_root, [2]) as x, datatype_of(x) as t:
        out = np.zeros(4, dtype="int32")
        with pytest.raises(Unsupported):
            read(sample_root, t, out)
        with pytest.raises(Unsupported):
            read(x, x, out)
    with pytest.raises(Unsupported):
        read_array(sample_root)


def test_read_converts_to_target_type(sample_root):
    with open_position(sample_root, [0, 2]) as y, datatype_of(y) as float_type:
        with open_position(sample_root, [2]) as x:
            out = np.zeros(4, dtype="float64")
            read(x, float_type, out)
    assert out.tolist() == [0.0, 1.0, 2.0, 3.0]
