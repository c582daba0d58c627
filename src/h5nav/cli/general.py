import platform

import typer
from rich import print

from h5nav import __version__
from h5nav.files import library_version

app = typer.Typer()


@app.command("info")
def info():
    """Show information about the system and Python environment."""
    import h5py
    import numpy

    un = platform.uname()
    print(f"[b]System:[/b] {un.system} {un.release} {un.version}")
    print(
        f"[b]Python:[/b] {platform.python_version()} ({platform.python_implementation()})"
    )
    print("[b]Env:[/b]")
    print("h5nav", __version__)
    print("h5py", h5py.__version__)
    print("numpy", numpy.__version__)
    print("HDF5", ".".join(map(str, library_version())))
