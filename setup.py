#!/usr/bin/env python

from setuptools import setup
from sys import version_info


if version_info < (3, 8):
    raise RuntimeError("Requires Python 3.8 or later.")

VERSION = '0.1b1'

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()


setup(
    name='xmlassert',
    version=VERSION,
    description="Test assertions that compare XML documents structurally.",
    long_description=readme + '\n\n' + history,
    long_description_content_type='text/x-rst',
    packages=['xmlassert'],
    package_dir={'xmlassert': 'xmlassert'},
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=('lxml',),
    extras_require={'test': ['pytest>=8']},
    license="AGPLv3+",
    zip_safe=False,
    entry_points={
        'console_scripts': ['xmlassert = xmlassert.cli:main'],
        'pytest11': ['xmlassert.pytest_plugin = xmlassert.pytest_plugin'],
    },
    keywords='xml testing assertions comparison equality',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Framework :: Pytest',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Affero General Public License v3 '
        'or later (AGPLv3+)',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Testing',
        'Topic :: Text Processing :: Markup :: XML'
    ],
)
