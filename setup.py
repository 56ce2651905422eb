from setuptools import setup, find_packages

setup(
    name="journey-cli",
    version="0.1.0",
    packages=find_packages(exclude=["journey.tests", "journey.tests.*"]),
    py_modules=["cli"],
    install_requires=[
        "boto3",
        "botocore",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto[s3]>=5",
        ],
    },
    entry_points={
        'console_scripts': [
            'journey=cli:main',
        ],
    },
    description="Publish versioned static web bundles to S3",
    python_requires='>=3.9',
)
