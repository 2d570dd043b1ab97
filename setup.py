from setuptools import setup

with open("requirements.txt") as f:
    required = f.read().splitlines()

exec(open("circdist/version.py").read())
setup(
    name="circdist",
    version=__version__,  # noqa: F821
    description="Von Mises distribution with a Fourier-Bessel series CDF",
    author="circdist developers",
    install_requires=required,
    extras_require={"test": ["pytest"]},
    packages=["circdist"],
    python_requires=">=3.8",
)
