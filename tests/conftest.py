"""
Pytest configuration and fixtures for Vestibule tests.
"""

import asyncio
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

# Check for pytest-asyncio
try:
    import pytest_asyncio
    HAS_PYTEST_ASYNCIO = True
except ImportError:
    HAS_PYTEST_ASYNCIO = False


FILES_PREFIX = "/files"


def pytest_collection_modifyitems(config, items):
    """Skip async tests if pytest-asyncio is not installed."""
    if HAS_PYTEST_ASYNCIO:
        return

    skip_asyncio = pytest.mark.skip(
        reason="pytest-asyncio not installed - async tests require pytest-asyncio"
    )
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(skip_asyncio)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sandbox(temp_dir: Path) -> Path:
    """A directory holding f.txt (10 bytes) and sub/nested.txt."""
    folder = temp_dir / "sandbox"
    folder.mkdir(parents=True, exist_ok=True)

    (folder / "f.txt").write_bytes(b"0123456789")

    subfolder = folder / "sub"
    subfolder.mkdir()
    (subfolder / "nested.txt").write_text("Nested content")

    return folder


@pytest.fixture
def fifo(sandbox: Path) -> Generator[Path, None, None]:
    """sandbox/pipe, a named pipe held open so opening it never blocks (not seekable)."""
    if not hasattr(os, "mkfifo"):
        pytest.skip("named pipes not supported")

    pipe = sandbox / "pipe"
    os.mkfifo(pipe)
    # O_RDWR on a FIFO does not wait for a peer on Linux
    holder = os.open(pipe, os.O_RDWR | os.O_NONBLOCK)
    yield pipe
    os.close(holder)


@pytest.fixture
def outside_file(temp_dir: Path) -> Path:
    """A file next to (not inside) the sandbox."""
    secret = temp_dir / "secret.txt"
    secret.write_text("top secret")
    return secret


@pytest.fixture
def files():
    """A fresh, empty namespace."""
    from vestibule.NamespaceGate import Files
    return Files()


@pytest.fixture
def attach(files):
    """Synchronously attach a path to the `files` fixture."""
    def _attach(path, name):
        return asyncio.run(files.attach(str(path), name))
    return _attach


@pytest.fixture
def client(files, monkeypatch):
    """TestClient over an app serving the `files` namespace at /files."""
    from fastapi.testclient import TestClient

    import vestibule.Config as config_module
    monkeypatch.setenv("FILES_ROUTE_PREFIX", FILES_PREFIX)
    config_module.reload()

    from portico.run import create_app
    return TestClient(create_app(files))


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset module-level state between tests."""
    yield

    try:
        import vestibule.NamespaceGate as namespace_gate
        namespace_gate._reset()
    except (ImportError, AttributeError):
        pass

    try:
        import vestibule.Config as config_module
        config_module._manager = None
    except (ImportError, AttributeError):
        pass
