from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="navgraph",
    version="0.1.0",
    description="Shortest routes and turn-by-turn directions on road networks.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.9",
    package_data={"navgraph.schemas": ["*.json"]},
    install_requires=["networkx", "pyyaml", "jsonschema"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["navgraph=navgraph.cli:main"]},
)
