import logging
import os
import sys
from typing import Set

from setuptools import find_packages, setup

CUR_DIR = os.path.abspath(os.path.dirname(__file__))
LONG_DESCRIPTION = None
if all(os.path.isfile(os.path.join(CUR_DIR, f)) for f in ["README.rst", "CHANGES.rst"]):
    with open(os.path.join(CUR_DIR, "README.rst"), mode="r", encoding="utf-8") as readme_f:
        README = readme_f.read()
    with open(os.path.join(CUR_DIR, "CHANGES.rst"), mode="r", encoding="utf-8") as changes_f:
        CHANGES = changes_f.read()
    LONG_DESCRIPTION = f"{README}\n\n{CHANGES}"

# ensure that 'gfycat' directory can be found for metadata import
sys.path.insert(0, CUR_DIR)
# pylint: disable=C0413,wrong-import-order
from gfycat import __meta__  # isort:skip # noqa: E402

LOGGER = logging.getLogger(f"{__meta__.__name__}.setup")
if logging.StreamHandler not in LOGGER.handlers:
    LOGGER.addHandler(logging.StreamHandler(sys.stdout))  # type: ignore # noqa
LOGGER.setLevel(logging.INFO)
LOGGER.info("starting setup")


def _parse_requirements(file_path, requirements, links):
    # type: (str, Set[str], Set[str]) -> None
    """
    Parses a requirements file to extra packages and links.

    :param file_path: file path to the requirements file.
    :param requirements: pre-initialized set in which to store extracted package requirements.
    :param links: pre-initialized set in which to store extracted link reference requirements.
    """
    with open(os.path.join(CUR_DIR, file_path), "r", encoding="utf-8") as requirements_file:
        for line in requirements_file:
            line = line.strip()
            # ignore empty line, comment line or reference to other requirements file (-r flag)
            if not line or line.startswith("#") or line.startswith("-"):
                continue
            if "git+https" in line:
                pkg = line.split("#")[-1]
                links.add(line)
                requirements.add(pkg.replace("egg=", "").rstrip())
            elif line.startswith("http"):
                links.add(line)
            else:
                requirements.add(line)


LOGGER.info("reading requirements")
# use set to have unique packages by name
LINKS = set()
REQUIREMENTS = set()
TEST_REQUIREMENTS = set()
_parse_requirements("requirements.txt", REQUIREMENTS, LINKS)
_parse_requirements("requirements-dev.txt", TEST_REQUIREMENTS, LINKS)
LINKS = list(LINKS)
REQUIREMENTS = list(REQUIREMENTS)
TEST_REQUIREMENTS = list(TEST_REQUIREMENTS)

LOGGER.info("base requirements: %s", REQUIREMENTS)
LOGGER.info("test requirements: %s", TEST_REQUIREMENTS)
LOGGER.info("link requirements: %s", LINKS)

setup(
    name=__meta__.__package__,
    version=__meta__.__version__,
    description=__meta__.__description__,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/x-rst",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: Developers",
        __meta__.__license_classifier__,
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Utilities",
    ],
    author=__meta__.__author__,
    author_email=", ".join(__meta__.__emails__),
    url=__meta__.__source_repository__,
    license=__meta__.__license_type__,
    keywords=" ".join(__meta__.__keywords__),
    packages=find_packages(exclude=["tests*"]),
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.10, <4",
    install_requires=REQUIREMENTS,
    dependency_links=LINKS,
    extras_require={
        "dev": TEST_REQUIREMENTS,
        "test": TEST_REQUIREMENTS,
    },
    entry_points={
        "console_scripts": [
            "{0} = {0}.cli:main".format(__meta__.__name__)
        ]
    }
)
