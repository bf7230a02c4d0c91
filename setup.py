from setuptools import setup, find_packages

setup(
    name="c4engine",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "gymnasium",  # Gymnasium environment harness
    ],
    extras_require={
        "test": ["pytest"],
    },
)
