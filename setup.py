from setuptools import setup, find_packages

setup(
    name="portfolio-rebalancer",
    version="1.0.0",
    author="Portfolio Rebalancer Team",
    description="Allocation and rebalancing calculation engine with health scoring and model comparison",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "portfolio_rebalancer": ["py.typed"],
        "rebalancer_config": ["py.typed"],
    },
    install_requires=[
        "pydantic==2.11.7",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    python_requires=">=3.11",
)
