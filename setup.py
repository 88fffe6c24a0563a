from setuptools import setup, find_packages

setup(
    name="boxgauss",
    version="0.1.0",
    description="Radius-independent approximate Gaussian blur using three box filters",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
        "bench": ["opencv-python", "Pillow", "matplotlib"],
    },
)
