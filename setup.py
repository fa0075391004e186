from setuptools import setup, find_packages


setup(
    name="namedbloom",
    version="0.1",
    packages=find_packages(include=["namedbloom", "namedbloom.*"]),
    description="Per-shard 16-bit Bloom summaries for zipped named-jsonl archives.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "asn1crypto>=1.5.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "namedbloom=namedbloom.cli:main",
        ]
    },
)
