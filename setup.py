#!/usr/bin/env python

"""Setup script for mathreveal"""

import codecs
from setuptools import setup, find_packages


def readme():
    """Use README as long description"""
    with codecs.open('README.md', encoding='utf-8') as f:
        return f.read()


setup(
    name='mathreveal',
    version='0.1.0',
    description='Render Markdown with embedded LaTeX math and word-by-word reveal',
    long_description=readme(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.10',
    install_requires=[
        'beautifulsoup4>=4.12',
        'click>=8.1',
        'latex2mathml>=3.76',
        'Markdown>=3.5',
        'rich>=13.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points='''
        [console_scripts]
        mathreveal=mathreveal.cli:main
    ''',
    package_dir={'': 'src'},
    packages=find_packages('src', exclude=('tests', 'tests.*')),
)
