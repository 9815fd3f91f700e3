# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import re
from os.path import join, abspath, dirname
from setuptools import setup, find_packages


original_wd = abspath(dirname(__file__))

# Parse the top level package for the version
# Do not use an import to prevent side effects
# e.g. required runtime dependencies
with open(join(original_wd, "src", "msaview", "__init__.py")) as init_file:
    for line in init_file.read().splitlines():
        if line.lstrip().startswith("__version__"):
            version_match = re.search('".*"', line)
            if version_match:
                # Remove quotes
                version = version_match.group(0)[1 : -1]
            else:
                raise ValueError("No version is specified in '__init__.py'")

with open(join(original_wd, "README.rst"), "r") as readme:
    long_description = readme.read()


setup(
    name="msaview",
    version = version,
    description = ("The computational core of a multiple sequence "
                   "alignment viewer"),
    long_description = long_description,
    long_description_content_type = "text/x-rst",
    author = "The msaview contributors",
    license = "BSD 3-Clause",
    classifiers = [
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],

    zip_safe = False,
    packages = find_packages("src"),
    package_dir = {"" : "src"},
    # Including substitution matrix database
    package_data = {
        "msaview.align" : ["matrix_data/*.mat"],
    },

    install_requires = ["numpy >= 1.19"],
    extras_require = {
        "test" : ["pytest"],
    },
    python_requires = ">=3.8",

    tests_require = ["pytest"],
)
