from setuptools import setup

setup(
    name="consoler",
    version="1.2.0",
    description="Declarative grammar and matcher for command line options",
    license="MIT",
    python_requires=">=3.9",
    packages=["consoler"],
    install_requires=[
        "typing_extensions>=4.4",
    ],
    extras_require={
        "test": [
            "pytest",
            "sybil>=6",
        ],
        "docs": [
            "sphinx",
            "furo",
        ],
    },
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Environment :: Console",
    ],
)
