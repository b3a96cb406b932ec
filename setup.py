"""
shacrypt setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
import re

from setuptools import setup, find_packages

#=============================================================================
# version string
#=============================================================================

# read version string without importing the package
with open(os.path.join(root_dir, "shacrypt", "__init__.py")) as fh:
    version = re.search(r'^__version__ = "([^"]+)"', fh.read(), re.M).group(1)

#=============================================================================
# static text
#=============================================================================
SUMMARY = "pure-python SHA512-crypt ($6$) password hashing"

DESCRIPTION = """\
shacrypt implements Ulrich Drepper's SHA512-crypt password hashing scheme,
the ``$6$`` format found in ``/etc/shadow`` on most Linux systems.
It generates salted, iterated hashes compatible with glibc's crypt(3) and
verifies passwords against existing hashes.

* Algorithm: https://www.akkadia.org/drepper/SHA-crypt.txt
"""

KEYWORDS = """\
password secret hash security
crypt sha512-crypt shadow
"""

CLASSIFIERS = """\
Intended Audience :: Developers
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: Implementation :: CPython
Programming Language :: Python :: Implementation :: PyPy
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
Development Status :: 5 - Production/Stable
""".splitlines()

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["shacrypt", "shacrypt.*"]),
    zip_safe=True,
    python_requires=">=3.9",
    install_requires=[
        "typing_extensions>=4.6",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "pytest-archon>=0.0.6",
        ],
    },

    # metadata
    name="shacrypt",
    version=version,
    license="BSD",

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,
)

#=============================================================================
# eof
#=============================================================================
