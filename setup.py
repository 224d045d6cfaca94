# setup.py
from setuptools import setup, find_packages

setup(
    name="cky",
    version="0.1.0",
    description="A small reference-counted Lisp with a pattern-driven lexer",
    packages=find_packages(include=["cky", "cky.*"]),
    package_data={"cky.reader": ["lisp.lex"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "cky=cky.__main__:main",
        ],
    },
    zip_safe=False,
)
