PACKAGE_NAME = "formulamatch"
VERSION = "0.1.0"
LICENSE = 'BSD (3-clause)'
AUTHOR = "Bioanalytical Mass Spectrometry Group at CIBION-CONICET"
AUTHOR_EMAIL = "griquelme.chm@gmail.com"
MAINTAINER = "Gabriel Riquelme"
MAINTAINER_EMAIL = AUTHOR_EMAIL
DESCRIPTION = "Find molecular formulas that coincide after applying corrections"

with open("README.md") as fin:
    LONG_DESCRIPTION = fin.read()
LONG_DESCRIPTION_CONTENT_TYPE = "text/markdown"

CLASSIFIERS = [
    "License :: OSI Approved :: BSD License",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Topic :: Scientific/Engineering :: Chemistry",
]

PYTHON_REQUIRES = ">=3.10"

INSTALL_REQUIRES = [
    "Cerberus>=1.3",
    "numpy>=1.22",
    "pandas>=1.4.1",
    "pydantic>=2.0",
    "PyYAML>=6.0",
    "tqdm>=4.0",
]

EXTRAS_REQUIRE = {
    "test": ["pytest"],
}

ENTRY_POINTS = {
    "console_scripts": ["formulamatch=formulamatch.cli:main"],
}

if __name__ == "__main__":
    from setuptools import setup, find_packages
    from sys import version_info

    if version_info[:2] < (3, 10):
        msg = "formulamatch requires Python >= 3.10."
        raise RuntimeError(msg)

    setup(name=PACKAGE_NAME,
          version=VERSION,
          author=AUTHOR,
          author_email=AUTHOR_EMAIL,
          maintainer=MAINTAINER,
          maintainer_email=MAINTAINER_EMAIL,
          license=LICENSE,
          description=DESCRIPTION,
          long_description=LONG_DESCRIPTION,
          long_description_content_type=LONG_DESCRIPTION_CONTENT_TYPE,
          classifiers=CLASSIFIERS,
          packages=find_packages(exclude=["tests", "tests.*"]),
          python_requires=PYTHON_REQUIRES,
          install_requires=INSTALL_REQUIRES,
          extras_require=EXTRAS_REQUIRE,
          entry_points=ENTRY_POINTS,
          include_package_data=True,
    )
