"""
setup.py for sim2d.

The core package needs only numpy. viewer.py imports pygame and ships
in the wheel next to __main__, which imports it only when no --snap is
requested. Install the "viewer" extra for the window and for PNG output.
"""

from setuptools import setup


setup(
    name="sim2d",
    version="0.1.0",
    description="Interactive 2D heat, wave and Game of Life grid simulations",
    packages=["sim2d"],
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={
        "viewer": ["pygame", "Pillow"],
        "test": ["pytest"],
    },
)
