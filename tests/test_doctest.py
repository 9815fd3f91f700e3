# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import doctest
from importlib import import_module
import numpy as np
import pytest


PACKAGES = [
    "msaview",
    "msaview.align",
    "msaview.phylo",
    "msaview.io",
    "msaview.io.fasta",
    "msaview.io.a3m",
    "msaview.io.stockholm",
    "msaview.io.clustal",
    "msaview.io.emf",
    "msaview.io.gff",
]


def _namespace(*package_names):
    namespace = {"np": np}
    for name in package_names:
        package = import_module(name)
        namespace.update(
            (attr, getattr(package, attr)) for attr in dir(package)
        )
    return namespace


@pytest.mark.parametrize("package_name", PACKAGES)
def test_doctest(package_name):
    """
    The examples in the docstrings of each subpackage run as shown.
    The names of the top level package and of the subpackage itself
    are available in the examples.
    """
    package = import_module(package_name)
    # The members of a subpackage are defined in its submodules, hence
    # 'module=False' is required to include them
    tests = doctest.DocTestFinder(exclude_empty=False).find(
        package, package_name, module=False,
        extraglobs=_namespace("msaview", package_name)
    )
    runner = doctest.DocTestRunner(
        optionflags=doctest.ELLIPSIS | doctest.NORMALIZE_WHITESPACE
    )
    for test in tests:
        runner.run(test)
    assert runner.failures == 0, \
        f"{runner.failures} of {runner.tries} examples failed"
