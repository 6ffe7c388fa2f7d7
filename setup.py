
from setuptools import setup, find_packages

setup(
    name="ngsmatch",
    version="1.0.0",
    author="ngsmatch developers",
    description="Sample identity QC for sequencing cohorts",
    long_description="Detects samples sequenced from the same individual by correlating read-depth allele fractions at a panel of known SNP loci",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
    'cyvcf2>=0.30',
    'numpy>=1.24.4',
    'pandas>=2.0.3',
    'click>=8.1',
    'pyyaml>=6.0',
    'matplotlib>=3.7',
    'seaborn>=0.13.2',
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "ngsmatch=ngsmatch.cli.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    )
