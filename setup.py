from setuptools import setup, find_packages

setup(
    name="standalone_connect4",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "gymnasium",  # ConnectFourEnv
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "connect4-engine=standalone_connect4.interfaces.cli:main",
        ],
    },
)
