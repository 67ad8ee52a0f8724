""" ringkyc build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import ringkyc

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=ringkyc.name,
    version=ringkyc.__version__,
    license=ringkyc.__license__,
    author=ringkyc.__author__,
    author_email=ringkyc.__author_email__,
    description="Ring signatures on BLS12-381 G1 for anonymous KYC attestation",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"ringkyc": ["_data/*.json"]},
    install_requires=["py_ecc", "dataclasses-json"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "cryptography elliptic-curves bls12-381 ring-signature schnorr "
        "anonymous-credentials kyc"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
