from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="image_comments",
    version=Path("./image_comments/VERSION").read_text().strip(),
    packages=find_packages(include=["image_comments", "image_comments.*"]),
    package_data={"image_comments": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python",
        "easydict",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["image_comments=image_comments.cli:main"],
    },
)
