from setuptools import setup, find_packages

setup(
    name="dicom_metadata_extractor",
    version="1.0.0",
    description="A command-line tool extracting the metadata of DICOM files to JSON.",

    packages=find_packages(exclude=["tests", "tests.*"]),

    py_modules=["cli", "cli_options", "run_extract"],

    python_requires=">=3.10",

    install_requires=[
        'click',
        'pydicom>=3.0',
        'pynetdicom>=2.1',
        'pandas',
        'openpyxl',
    ],

    extras_require={
        'test': [
            'pytest',
        ],
    },

    entry_points={
        'console_scripts': [
            'dicom-metadata=cli:cli',
            'dicom-metadata-batch=run_extract:main',
        ],
    },
)
