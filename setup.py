import re

from setuptools import find_packages, setup


with open("glint/_version.py", "rb") as fh:
    init_text = fh.read().decode()
    VERSION = re.search(r"__version__ = \"(.*?)\"", init_text).group(1)


runtime_deps = [
    "numpy",
    "wgpu",
    "Jinja2",
]

extras_require = {
    "dev": [
        "black",
        "flake8",
        "flake8-black",
        "pep8-naming",
        "pytest",
        "setuptools",
        "wheel",
        "twine",
    ],
    "tests": [
        "pytest",
    ],
}


setup(
    name="glint",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "glint.glsl": ["*.glsl", "*.frag"],
    },
    python_requires=">=3.9.0",
    install_requires=runtime_deps,
    extras_require=extras_require,
    license="BSD 2-Clause",
    description="Compose real-time fragment shaders from parameterized effects",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    zip_safe=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Multimedia :: Graphics",
    ],
    entry_points={
        "console_scripts": [
            "glint = glint.__main__:main",
        ],
    },
)
