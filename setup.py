# setup.py
from setuptools import setup, find_packages

setup(
    name="onion",
    version="0.1.0",
    description="Onion: a small expression language with a runtime-extensible operator grammar",
    packages=find_packages(include=["onion", "onion.*"]),
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "onion=onion.__main__:main",
        ],
    },
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
