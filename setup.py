# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="fsrouter",
    version="0.1.0",
    description="Generate gorilla/mux route registration code from an api/ directory tree",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["fsrouter", "fsrouter.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'fsrouter=fsrouter.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
