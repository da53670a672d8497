# SPDX-License-Identifier: AGPL-3.0-or-later
"""Installer for the osdd package."""

from setuptools import setup, find_packages

with open('README.rst', encoding='utf-8') as f:
    long_description = f.read()

with open('requirements.txt') as f:
    requirements = [l.strip() for l in f.readlines() if l.strip()]

with open('requirements-dev.txt') as f:
    dev_requirements = [l.strip() for l in f.readlines() if l.strip()]

setup(
    name='osdd',
    description="Strict parser of OpenSearch description documents.",
    long_description=long_description,
    license="AGPL-3.0-or-later",
    python_requires=">=3.10",
    version="1.0.0",
    keywords='opensearch osdd searchengine search xml parser',
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Topic :: Internet",
        "Topic :: Text Processing :: Markup :: XML",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    entry_points={'console_scripts': ['osdd = osdd.__main__:app']},
    packages=find_packages(include=['osdd', 'osdd.*']),
    package_data={
        'osdd': [
            'settings.yml',
        ],
    },
    install_requires=requirements,
    extras_require={'test': dev_requirements},
)
