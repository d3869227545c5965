import os

import setuptools

_findver = "__version__ = "
_rootpath = os.path.join(os.path.dirname(__file__), "morphotree", "__init__.py")
with open(_rootpath, "r") as f:
    for line in f:
        if "__version__ = " in line:
            f = line.find(_findver)
            __version__ = eval(line[line.find(_findver) + len(_findver) :])
            break
    else:
        raise Exception(f"No `__version__` found in '{_rootpath}'.")

with open("README.md", "r") as fh:
    long_description = fh.read()

requires = [
    "numpy>=1.19",
    "errr~=1.2",
    "toml",
]

setuptools.setup(
    name="morphotree",
    version=__version__,
    description="Mutable and read-only section trees of neuron morphologies",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPLv3",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=requires,
    extras_require={
        "test": ["pytest", "coverage~=7.0"],
        "dev": [
            "pre-commit",
            "black~=22.3.0",
        ],
    },
)
