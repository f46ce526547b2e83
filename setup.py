from setuptools import setup, find_packages

setup(
    name="appdb",
    version="1.0.0",
    description="appdb - application database via .desktop files",
    author="Nedko Arnaudov",
    license="GPLv2+",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "PyQt6>=6.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "appdb=appdb.main:main",
        ],
    },
)
