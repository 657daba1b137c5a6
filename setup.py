from setuptools import setup, find_packages

setup(
    name="noble-class",
    version="1.0.0",
    description="Property-preserving class extension with a built-in event emitter",
    author="Your Name",
    packages=find_packages(include=["noble", "noble.*"]),
    include_package_data=True,
    install_requires=[
        # Property descriptor models
        "pydantic>=2.0.0",

        # Environment variables
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.11",
    package_dir={"": "."},
)
