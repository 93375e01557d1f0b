"""Checks that packaging metadata matches the importable package."""

import importlib
import re
from pathlib import Path

import pytest

SETUP_PY = Path(__file__).parent.parent / "setup.py"


@pytest.fixture
def setup_source() -> str:
    """Text of setup.py."""
    return SETUP_PY.read_text(encoding="utf-8")


class TestSetup:
    """setup.py declarations."""

    def test_license_classifier(self, setup_source) -> None:
        """The MIT license classifier is declared."""
        assert '"License :: OSI Approved :: MIT License"' in setup_source

    def test_console_scripts(self, setup_source) -> None:
        """Both console scripts are declared and nothing else."""
        scripts = dict(re.findall(r'"([\w-]+)=([\w.]+:\w+)"', setup_source))
        assert scripts == {
            "zkcircuit-demo": "zkcircuit.main:main",
            "zkcircuit-walkthrough": "zkcircuit.builder.demo:main",
        }

    def test_console_scripts_resolve(self, setup_source) -> None:
        """Every entry point names an importable callable."""
        for target in re.findall(r'"[\w-]+=([\w.]+:\w+)"', setup_source):
            module_name, attr = target.split(":")
            assert callable(getattr(importlib.import_module(module_name), attr))
