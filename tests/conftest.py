import secrets
import shutil
from pathlib import Path

import h5py
import numpy as np
import pytest

from h5nav.files import open_file


@pytest.fixture(scope="session")
def h5_dir(tmpdir_factory):
    """Create a fresh temporary directory for files created in the tests."""
    return tmpdir_factory.mktemp("h5nav_tests")


@pytest.fixture
def tmp_h5_path_factory(h5_dir):
    """Return a file path generator to be used for creating files.

    All files will be cleaned up after completing the test.
    """
    names = []

    def fresh_name() -> Path:
        name = secrets.token_hex(4)
        names.append(name)
        return Path(h5_dir / f"{name}.h5")

    yield fresh_name

    # clean up
    for name in names:
        for path in Path(h5_dir).glob(f"{name}*"):
            if path.is_file() or path.is_symlink():
                path.unlink()
            elif path.is_dir():
                shutil.rmtree(path)


@pytest.fixture
def tmp_h5_path(tmp_h5_path_factory):
    """Generate a fresh file path, the file is cleaned up after the test."""
    return tmp_h5_path_factory()


# ---- sample files (written with h5py, tracking creation order everywhere)


def write_simple(path: Path):
    """Root with a dataset `x` holding 4 ints, which has a string attribute `units`."""
    with h5py.File(path, "w", track_order=True) as f:
        ds = f.create_dataset("x", data=np.arange(4, dtype="int32"), track_order=True)
        ds.attrs["units"] = "m"


def write_sample(path: Path):
    """Nested groups, various payload types, attributes and object references.

    Children of the root in creation order: x, grp, refs (in name order: grp, refs, x).
    """
    with h5py.File(path, "w", track_order=True) as f:
        f.attrs["title"] = "sample"
        f.attrs["version"] = 3

        x = f.create_dataset("x", data=np.arange(4, dtype="int32"), track_order=True)
        x.attrs["units"] = "m"
        x.attrs["scale"] = 0.5

        grp = f.create_group("grp", track_order=True)
        grp.attrs["note"] = "nested"
        grp.create_dataset(
            "y",
            data=np.linspace(0, 1, 6).reshape(2, 3),
            maxshape=(None, 3),
            track_order=True,
        )
        grp.create_dataset(
            "fixed", data=np.array([b"ab", b"cd", b"ef"], dtype="S2"), track_order=True
        )
        grp.create_group("sub", track_order=True)

        f.create_dataset(
            "refs", data=[x.ref, grp.ref], dtype=h5py.ref_dtype, track_order=True
        )


def write_typed(path: Path):
    """Root with a committed datatype `a_type` and a dataset `b`."""
    with h5py.File(path, "w", track_order=True) as f:
        f["a_type"] = np.dtype("int16")
        f.create_dataset("b", data=np.arange(3, dtype="int16"), track_order=True)


def write_untracked(path: Path):
    """Like `write_simple`, with h5py defaults (no creation order tracking).

    Also has a group `many` with 20 attributes, which HDF5 keeps in dense storage.
    """
    with h5py.File(path, "w") as f:
        ds = f.create_dataset("x", data=np.arange(4, dtype="int32"))
        ds.attrs["units"] = "m"
        many = f.create_group("many")
        for i in range(20):
            many.attrs[f"a{i:02d}"] = i


@pytest.fixture
def simple_file(tmp_h5_path):
    write_simple(tmp_h5_path)
    return tmp_h5_path


@pytest.fixture
def sample_file(tmp_h5_path):
    write_sample(tmp_h5_path)
    return tmp_h5_path


@pytest.fixture
def typed_file(tmp_h5_path):
    write_typed(tmp_h5_path)
    return tmp_h5_path


@pytest.fixture
def untracked_file(tmp_h5_path):
    write_untracked(tmp_h5_path)
    return tmp_h5_path


@pytest.fixture
def simple_root(simple_file):
    """Open root of the simple file, closed after the test."""
    with open_file(simple_file) as root:
        yield root


@pytest.fixture
def sample_root(sample_file):
    """Open root of the sample file, closed after the test."""
    with open_file(sample_file) as root:
        yield root


@pytest.fixture
def typed_root(typed_file):
    with open_file(typed_file) as root:
        yield root


@pytest.fixture
def count_calls(monkeypatch):
    """Wrap an engine primitive by name, return the list collecting its arguments."""
    from h5nav import engine

    def wrap(name: str):
        calls = []
        orig = getattr(engine, name)

        def wrapped(*args, **kwargs):
            calls.append(args)
            return orig(*args, **kwargs)

        monkeypatch.setattr(engine, name, wrapped)
        return calls

    return wrap
