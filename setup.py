from setuptools import setup

setup(
    name="dicograph",
    version="0.1.0",
    description="Reduce word-dependency graphs to their essential words",
    license="MIT",
    packages=["dicograph", "dicograph.templates"],
    python_requires=">=3.8",
    install_requires=["Jinja2>=3,<4", "PyYAML>=5.1"],
    extras_require={"test": ["pytest>=7", "hypothesis>=6"]},
    package_data={"dicograph.templates": ["*.jinja"],},
    entry_points={"console_scripts": ["dg = dicograph.cli:main"]},
)
