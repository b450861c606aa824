from setuptools import setup, find_packages

setup(
    name="leveldat",
    version="0.1.0",
    packages=find_packages(include=["leveldat", "leveldat.*"]),
    install_requires=[
        "cbor2>=5.6.5",
        "dacite>=1.8.1",
        "ruamel.yaml>=0.18.6",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "leveldat=leveldat.scripts.leveldat_cmd:main",
        ],
    },
    author="TwoTurtles",
    description="Reader for Bedrock style little-endian level.dat files",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
