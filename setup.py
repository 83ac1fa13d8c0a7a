from setuptools import setup, find_packages

setup(
    name="dancing-links",
    version="1.0.0",
    description="Reversible circular linked lists for Knuth's Dancing Links",
    author="robomotic",
    packages=find_packages(include=["dancing_links", "dancing_links.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.6.0",
        "seaborn>=0.11.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0", "pandas>=1.3.0"],
    },
    entry_points={
        "console_scripts": [
            "dancing-links=dancing_links.cli:main",
        ],
    },
)
