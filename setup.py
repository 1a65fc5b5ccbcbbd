from setuptools import setup, find_packages


def get_description():
    return "Python futures which time out without racing a timer future"


def get_long_description():
    text = open("README.md").read()

    # The README starts with the same text as "description",
    # which makes sense, but on PyPI causes same text to be
    # displayed twice.  So let's strip that.
    return text.replace(get_description() + ".\n\n", "", 1)


def get_requirements(filename):
    return [
        line.strip()
        for line in open(filename).readlines()
        if line.strip() and not line.startswith("#")
    ]


setup(
    name="timed-futures",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"timed_futures": ["*.pyi", "**/*.pyi"]},
    include_package_data=True,
    zip_safe=False,
    license="GNU General Public License",
    description=get_description(),
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.9",
    install_requires=get_requirements("requirements.in"),
    extras_require={
        "prometheus": ["prometheus-client"],
        "test": get_requirements("test-requirements.in"),
    },
)
