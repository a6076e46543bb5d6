from setuptools import setup, find_packages

setup(
    name="undrstnd-ai",  # Package name
    version="0.1.0",  # Version number
    author="Undrstnd Labs",
    description="Undrstnd chat-completion adapter for vendor-neutral language model calls.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/undrstnd-labs/undrstnd",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests",
        "python-dotenv",
        "pydantic>=2",
        "backoff",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
