#!/usr/bin/env python3
"""
Setup script for the Weissman score input preparation pipeline.
This script configures the package for installation with pip.
"""

from setuptools import setup, find_packages
import os

# Get the current directory
current_dir = os.path.dirname(os.path.abspath(__file__))

# Read requirements from requirements.txt
with open(os.path.join(current_dir, 'requirements.txt')) as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setup(
    name="weissman_prep",
    version="0.1.0",
    description="Prepare TSS and sgRNA annotations for CRISPRa/CRISPRi Weissman score prediction",
    author="CRISPR Analysis Team",
    # Find packages automatically, excluding tests, scripts, docs, etc.
    packages=find_packages(include=['weissman_prep', 'weissman_prep.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires=">=3.8",
    entry_points={
        'console_scripts': [
            'run_weissman_score=weissman_prep.run_weissman_score:main',
        ],
    },
)
