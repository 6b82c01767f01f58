from setuptools import setup, find_packages

# Read dependencies from requirements.txt
with open("requirements.txt") as f:
    install_requires = [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Read version from version.txt
with open("version.txt") as f:
    version = f.read().strip()

setup(
    name="testsweep",
    version=version,
    packages=find_packages(include=["testsweep", "testsweep.*"]),
    install_requires=install_requires,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "testsweep=testsweep.main:main",
        ],
    },
    package_data={
        "testsweep.input": ["config_file/*.json"],
        "testsweep.input.templates.config_file": ["*.template"],
    },
    include_package_data=True,
    description="Parameterized test sweep driver: runs a test executable over a cross-product of parameters",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
    ],
    python_requires=">=3.9",
)
