#!/usr/bin/env python3

from setuptools import setup
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="bunnyfont",
        packages=["bunnyfont", "bunnyfont.backends", "bunnyfont.apps"],
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Bitmap fonts and tile sprites cut from a fixed-grid atlas",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["font", "bitmap", "sprite", "tileset"],
        classifiers=[],
        install_requires=[
            "numpy",
            "PyOpenGL>=3.1",
            "glfw>=2.5.0",
            "Pillow>=9.0",
            "PyQt6>=6.4",
        ],
        extras_require={
            "test": ["pytest"],
        },
        entry_points={
            "console_scripts": [
                "bunnyfont-indexer=bunnyfont.apps.indexer:main",
            ],
        },
        zip_safe=False,
    )
