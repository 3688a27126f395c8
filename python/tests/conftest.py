from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
if str(PYTHON_DIR) not in sys.path:
    sys.path.insert(0, str(PYTHON_DIR))

import latebind.runtime  # noqa: E402
from latebind import Config, Namespace, Runtime  # noqa: E402

ENV_KEYS = ("LOOSE_DEFAULTS", "DUAL_LAYER", "FORCE_WRITABLE", "PRIVATE_PREFIX")


@pytest.fixture(autouse=True)
def isolated_default_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each test sees a fresh default runtime built from a clean environment."""
    for key in ENV_KEYS:
        monkeypatch.delenv(f"LATEBIND_{key}", raising=False)
    monkeypatch.setattr(latebind.runtime, "_DEFAULT_RUNTIME", None)


@pytest.fixture
def runtime() -> Runtime:
    return Runtime()


@pytest.fixture
def loose_runtime() -> Runtime:
    return Runtime(Config(loose_defaults=True))


@pytest.fixture
def ns() -> Namespace:
    return Namespace()
