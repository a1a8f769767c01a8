from setuptools import setup, find_packages

setup(
    name="uscovid",
    version="0.0.1",
    description="COVID-19 US case and death report pipeline.",
    packages=find_packages(exclude=["tests"]),
    install_requires=["numpy", "pandas", "requests"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
)
