from setuptools import setup, find_packages

setup(
    name="reviewvec",
    version="0.1.0",
    packages=find_packages(include=["reviewvec", "reviewvec.*"]),
    description="Multi-hot preprocessing and a dense sentiment classifier for tokenized reviews",
    author="Jonathan Wallace",
    author_email="jonathan@example.com",
    python_requires=">=3.8",
    install_requires=[
        "torch",
        "pandas",
        "numpy",
        "matplotlib",
        "scikit-learn",
        "python-dotenv"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
)
