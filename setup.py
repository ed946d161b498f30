from setuptools import setup, find_packages

setup(
    name="fourinarow",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # environment wrapper for agents
        "filelock",  # locking for the JSON data files
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["fourinarow=fourinarow.interfaces.cli:main"],
    },
)
