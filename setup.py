"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def jsonapi_compound_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "0.4.0"

    setup(
        name="jsonapi-compound",
        packages=find_packages(exclude=["tests", "tests.*"]),
        version=version,
        license="MIT",
        description="jsonapi-compound : JSON:API compound documents for arbitrary object graphs",
        long_description=open("README.rst").read(),
        keywords=["JsonAPI", "Flask", "SqlAlchemy", "REST", "include", "compound documents"],
        python_requires=">=3.8, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "License :: OSI Approved :: MIT License",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Libraries",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3",
        ],
        extras_require={"test": ["pytest>=7", "Flask-SQLAlchemy>=3.0"]},
    )


jsonapi_compound_setup()  # pragma: no cover
