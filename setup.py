import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="notestash",
    version="0.1.0",
    description="Stores notes as plain files in a directory and serves them over HTTP.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=setuptools.find_packages('src'),
    package_dir={'': 'src'},
    package_data={
        'notestash': ['openapi.yaml', 'templates/*.mako'],
    },
    entry_points={
        'console_scripts': [
            'notestash = notestash.cli:main'
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        'Flask>=2.0',
        'Mako>=1.1.3',
        'pyyaml>=5.3.1',
        'shortuuid',
        'terminaltables',
    ],
    extras_require={
        'test': [
            'pytest',
            'pyfakefs',
            'pytest-mock',
        ],
    },
    python_requires='>=3.7',
)
