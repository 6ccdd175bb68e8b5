# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Domain purity: domain modules import only stdlib math/time helpers, numpy and translunar."""
import ast
import importlib

import pytest

_DOMAIN_MODULES = [
    "translunar.domain.orbital_mechanics",
    "translunar.domain.anomaly",
    "translunar.domain.lunar_ephemeris",
    "translunar.domain.equator_crossing",
    "translunar.domain.closest_approach",
    "translunar.domain.simplex",
    "translunar.domain.transfer_optimization",
    "translunar.domain.mission_profile",
    "translunar.domain.transfer_report",
]

_ALLOWED = {
    'math', 'numpy', 'dataclasses', 'typing', 'abc', 'enum', '__future__',
    'datetime', 'logging', 'concurrent',
}


@pytest.mark.parametrize("module_name", _DOMAIN_MODULES)
def test_module_pure(module_name):
    mod = importlib.import_module(module_name)

    with open(mod.__file__, encoding="utf-8") as f:
        tree = ast.parse(f.read())

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                root = alias.name.split('.')[0]
                if root not in _ALLOWED and root != 'translunar':
                    assert False, f"{module_name}: disallowed import '{alias.name}'"
        if isinstance(node, ast.ImportFrom):
            if node.module and node.level == 0:
                root = node.module.split('.')[0]
                if root not in _ALLOWED and root != 'translunar':
                    assert False, f"{module_name}: disallowed import from '{node.module}'"


@pytest.mark.parametrize("module_name", _DOMAIN_MODULES)
def test_domain_does_not_import_adapters(module_name):
    mod = importlib.import_module(module_name)

    with open(mod.__file__, encoding="utf-8") as f:
        tree = ast.parse(f.read())

    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            assert not node.module.startswith("translunar.adapters"), (
                f"{module_name} imports adapter module {node.module}"
            )
