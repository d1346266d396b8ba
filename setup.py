# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()


requirements = ["lief>=0.14.0"]


setup(
    name='camlsym',
    # note to self: always change this in config as well.
    version='1.0.0',
    description='A demangler for OCaml native symbol names, with a LIEF based symbol provider for ELF, Mach-O and PE binaries.',
    long_description_content_type="text/markdown",
    long_description=long_description,
    license="BSD 2-Clause",
    packages=find_packages(exclude=('tests', 'docs')),
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Debuggers",
        "Topic :: Software Development :: Disassemblers",
    ],
)
