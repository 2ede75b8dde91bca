import setuptools

readme = ""
with open("README.md", encoding="utf-8") as handle:
    readme = handle.read()

setuptools.setup(
    name="tagmap",
    version="0.1.0",
    description="In-memory key-value map with tag based reverse lookup.",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(
        include=["tagmap", "tagmap.*"],
    ),
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "tagmap = tagmap.cli:main"
        ]
    },
    install_requires=[
        "cerberus>=1.3.5",
        "click>=8.0",
        "mergedeep>=1.3",
        "rich>=10.3",
        "ruamel.yaml.clib>=0.2",
        "ruamel.yaml>=0.17",
        "toolz>=0.11",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
