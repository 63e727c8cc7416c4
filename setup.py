from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pyfastresample",
    version="0.1.0",
    author="Boris Gailleton",
    author_email="boris.gailleton@univ-rennes.fr",
    description="Taichi-accelerated resampling of 2D slices from volumetric images",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
    ],
    python_requires=">=3.9",
    install_requires=[
        "taichi>=1.4.0",
        "numpy>=1.20.0",
        "click>=7.0",
        "pillow>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    keywords="image resampling bilinear nearest-neighbor slice viewer taichi",
    entry_points={
        "console_scripts": [
            "pfr-scale=pyfastresample.cli.rastermanip_commands:grid_scale",
            "pfr-flip=pyfastresample.cli.rastermanip_commands:grid_flip",
            "pfr-slice2png=pyfastresample.cli.slice2png_commands:slice2png",
        ],
    },
)
